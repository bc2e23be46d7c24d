"""Main application object.

``CargoProApp`` builds every service once and passes it to the controllers
that need it. ``main()`` runs a small terminal front-end over the headless
views.
"""

from __future__ import annotations

import argparse
import shlex
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from cargopro.api_client import ObjectsApiClient
from cargopro.config import Settings, get_settings
from cargopro.identity import IdentityProvider
from cargopro.models.schemas import ObjectRecord
from cargopro.utils.logger import setup_logging
from gui.controllers.auth_controller import AuthController
from gui.controllers.object_controller import ObjectController
from gui.services.clients import get_api_client, get_identity_provider
from gui.state import AppState, Notice
from gui.utils.async_tasks import run_async
from gui.utils.logging import log_notice
from gui.views.home import HomeView
from gui.views.login import LoginView
from gui.views.object_detail import ObjectDetailView
from gui.views.object_form import ObjectFormView
from gui.views.object_list import ObjectListView


@dataclass
class CargoProApp:
    """App shell: owns the controllers and routes between login and home."""

    settings: Settings = field(default_factory=get_settings)
    api: Optional[ObjectsApiClient] = None
    identity: Optional[IdentityProvider] = None
    state: AppState = field(default_factory=AppState)
    use_identity_provider: bool = True

    def __post_init__(self) -> None:
        if self.api is None:
            self.api = get_api_client(self.settings)
        if self.identity is None and self.use_identity_provider:
            self.identity = get_identity_provider(self.settings)

        self.auth = AuthController(
            self.identity,
            dev_phone_number=self.settings.dev_phone_number,
            dev_otp_code=self.settings.dev_otp_code,
            notifier=self.on_notice,
        )
        # Lives for the whole session so user-created objects survive navigation
        self.objects = ObjectController(
            self.api,
            page_size=self.settings.page_size,
            reserved_max_id=self.settings.reserved_max_id,
            notifier=self.on_notice,
        )
        self.initial_fetch: Optional[Future] = None
        self.auth.subscribe(self._on_auth_changed)

    def on_notice(self, notice: Notice) -> None:
        self.state.push_notice(notice)
        log_notice(notice)

    def dispatch(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Future:
        """Run a blocking controller operation off the UI thread."""
        return run_async(fn, *args, **kwargs)

    def _on_auth_changed(self, auth: AuthController) -> None:
        if auth.is_logged_in and self.state.current_view == "login":
            self.switch_view("home")
            if self.initial_fetch is None:
                self.initial_fetch = self.dispatch(self.objects.on_init)
        elif not auth.is_logged_in and self.state.current_view != "login":
            self.switch_view("login")

    def switch_view(self, view_name: str) -> None:
        """Switch the active view."""

        self.state.current_view = view_name

    # View factories ---------------------------------------------------
    def login_view(self) -> LoginView:
        return LoginView(auth=self.auth, runner=self.dispatch)

    def home_view(self) -> HomeView:
        return HomeView(auth=self.auth)

    def list_view(self) -> ObjectListView:
        return ObjectListView(objects=self.objects, runner=self.dispatch)

    def detail_view(self, record: ObjectRecord) -> ObjectDetailView:
        return ObjectDetailView(objects=self.objects, initial=record, runner=self.dispatch)

    def form_view(self, editing: Optional[ObjectRecord] = None) -> ObjectFormView:
        return ObjectFormView(objects=self.objects, editing=editing, runner=self.dispatch)

    def current_view(self):
        if self.state.current_view == "login":
            return self.login_view()
        if self.state.current_view == "objects":
            return self.list_view()
        return self.home_view()

    def run(self) -> None:
        """Run the terminal front-end until the user quits."""

        TerminalShell(self).loop()

    def close(self) -> None:
        self.api.close()


class TerminalShell:
    """Line-oriented front-end: one command per line, views printed as text."""

    HELP = (
        "commands: objects | next | prev | more | page N | size N | refresh | "
        "show ID | add NAME [JSON] | edit ID NAME [JSON] | delete ID | "
        "phone NUMBER | code CODE | logout | help | quit"
    )

    def __init__(self, app: CargoProApp, input_fn: Callable[[str], str] = input, output_fn: Callable[[str], None] = print):
        self.app = app
        self.login = app.login_view()
        self._input = input_fn
        self._output = output_fn

    def show(self, lines: List[str]) -> None:
        for line in lines:
            self._output(line)

    def _find(self, object_id: str) -> Optional[ObjectRecord]:
        for record in self.app.objects.all_objects:
            if record.id == object_id:
                return record
        return None

    @staticmethod
    def _await(future: Optional[Future]) -> Any:
        # A terminal has nothing to draw meanwhile, so it waits for the result
        return future.result() if future is not None else None

    def _wait_for_initial_fetch(self) -> None:
        self._await(self.app.initial_fetch)

    def handle(self, line: str) -> bool:
        """Execute one command. Returns False when the user asked to quit."""
        try:
            parts = shlex.split(line)
        except ValueError as exc:
            self._output(f"! {exc}")
            return True
        if not parts:
            return True
        command, args = parts[0].lower(), parts[1:]
        app = self.app

        if command in ("quit", "exit"):
            return False
        if command == "help":
            self._output(self.HELP)
            return True
        if command == "phone" and args:
            self._await(self.login.submit_phone(" ".join(args)))
            self.show(self.login.render())
            return True
        if command == "code" and args:
            self._await(self.login.submit_code(args[0]))
            self.show(self.login.render() if not app.auth.is_logged_in else app.home_view().render())
            return True
        if not app.auth.is_logged_in:
            self._output("Please sign in first: phone NUMBER, then code CODE")
            return True

        self._wait_for_initial_fetch()
        list_view = app.list_view()
        if command == "objects":
            app.switch_view("objects")
        elif command == "next":
            list_view.next_page()
        elif command == "prev":
            list_view.previous_page()
        elif command == "more":
            list_view.on_scroll_end()
        elif command == "page" and args and args[0].isdigit():
            app.objects.go_to_page(int(args[0]))
        elif command == "size" and args and args[0].isdigit():
            app.objects.change_page_size(int(args[0]))
        elif command == "refresh":
            self._await(list_view.refresh())
        elif command == "show" and args:
            record = self._find(args[0]) or ObjectRecord(id=args[0], name=f"Object {args[0]}")
            detail = app.detail_view(record)
            self._await(detail.reload())
            self.show(detail.render())
            return True
        elif command == "add" and args:
            form = app.form_view()
            form.name_text = args[0]
            form.payload_text = args[1] if len(args) > 1 else ""
            self._await(form.submit())
            self.show(form.render() if form.errors else [])
        elif command == "edit" and len(args) >= 2:
            record = self._find(args[0])
            if record is None:
                self._output(f"! Unknown object {args[0]}")
                return True
            form = app.form_view(editing=record)
            form.name_text = args[1]
            if len(args) > 2:
                form.payload_text = args[2]
            self._await(form.submit())
            self.show(form.render() if form.errors else [])
        elif command == "delete" and args:
            record = self._find(args[0])
            if record is None:
                self._output(f"! Unknown object {args[0]}")
                return True
            self._await(app.detail_view(record).delete())
        elif command == "logout":
            app.auth.logout()
            self.show(self.login.render())
            return True
        else:
            self._output(self.HELP)
            return True

        notice = app.state.last_notice
        if notice is not None and notice.level == "error" and app.objects.has_error:
            self._output(f"! {notice.title}: {notice.message}")
        self.show(app.list_view().render())
        return True

    def loop(self) -> None:
        self.show(self.app.current_view().render())
        self._output(self.HELP)
        while True:
            try:
                line = self._input("> ")
            except EOFError:
                break
            if not self.handle(line):
                break


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Browse and edit restful-api.dev objects")
    parser.add_argument("--base-url", help="Objects collection URL")
    parser.add_argument("--page-size", type=int, help="Objects per page")
    parser.add_argument("--log-level", default=None, help="Logging level (default: CP_LOG_LEVEL)")
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(args.log_level or settings.log_level)
    if args.base_url:
        settings.api_base_url = args.base_url
    if args.page_size:
        settings.page_size = args.page_size

    app = CargoProApp(settings=settings)
    try:
        app.run()
    finally:
        app.close()


if __name__ == "__main__":
    main()
