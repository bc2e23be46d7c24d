"""
UI smoke tests.
Views are headless, so these drive them end to end against a mocked API.
"""

import pytest
import threading
import sys
import os
from concurrent.futures import Future
from unittest.mock import Mock

# Ensure project root is on path
ROOT = os.path.dirname(os.path.dirname(__file__))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from cargopro.api_client import ObjectsApiClient
from cargopro.config import Settings
from cargopro.errors import NetworkUnavailable, NotFound
from cargopro.models.schemas import ObjectRecord


def reserved(n):
    return [ObjectRecord(id=str(i), name=f"Reserved {i}", data={"i": i}) for i in range(1, n + 1)]


@pytest.fixture()
def api():
    api = Mock(spec=ObjectsApiClient)
    api.list_objects.return_value = reserved(13)
    return api


@pytest.fixture()
def app(api):
    from gui.app import CargoProApp

    settings = Settings()
    settings.dev_phone_number = "+91 99999 99999"
    settings.dev_otp_code = "123456"
    settings.page_size = 10
    return CargoProApp(settings=settings, api=api, use_identity_provider=False)


def sign_in(app):
    app.auth.send_otp("+91 99999 99999")
    app.auth.verify_otp("123456")
    app.initial_fetch.result(timeout=5)


# ===========================================================================
# App shell
# ===========================================================================


class TestApp:
    def test_starts_on_login(self, app, api):
        assert app.state.current_view == "login"
        assert app.current_view().name == "login"
        api.list_objects.assert_not_called()

    def test_login_routes_home_and_fetches_once(self, app, api):
        sign_in(app)
        assert app.state.current_view == "home"
        assert app.objects.total_objects == 13
        api.list_objects.assert_called_once()

        app.auth.logout()
        assert app.state.current_view == "login"
        sign_in(app)
        api.list_objects.assert_called_once()

    def test_notices_are_recorded(self, app):
        sign_in(app)
        assert app.state.last_notice.title == "🚀 DEV MODE: Login Success"

    def test_dispatch_returns_future(self, app):
        future = app.dispatch(lambda x: x * 2, 21)
        assert future.result(timeout=5) == 42


# ===========================================================================
# Views
# ===========================================================================


class TestLoginView:
    def test_validation_blocks_bad_input(self, app):
        view = app.login_view()
        assert view.submit_phone("12345") is None
        assert view.field_error == "Please enter a valid phone number with country code"
        assert view.submit_phone("") is None
        assert view.field_error == "Please enter your phone number"

    def test_code_must_have_six_digits(self, app):
        view = app.login_view()
        assert view.submit_phone("+91 99999 99999").result(timeout=5) is True
        assert view.submit_code("123") is None
        assert view.field_error == "Please enter a 6-digit code"
        assert "Enter the 6-digit code sent to +91 99999 9****" in view.render()
        assert view.submit_code("123456").result(timeout=5) is True


class TestObjectViews:
    def test_list_renders_page_and_reserved_tag(self, app):
        sign_in(app)
        lines = app.list_view().render()
        assert lines[0] == "#1 Reserved 1 (reserved) - i: 1"
        assert lines[-1] == "Page 1/2 - 10 objects"

    def test_list_paging(self, app):
        sign_in(app)
        view = app.list_view()
        view.next_page()
        assert app.objects.current_page == 2
        view.next_page()
        assert app.objects.current_page == 2
        view.previous_page()
        view.on_scroll_end()
        assert app.objects.current_page == 2

    def test_list_error_state(self, app, api):
        api.list_objects.side_effect = NetworkUnavailable()
        sign_in(app)
        assert app.list_view().render()[0] == "Error"

    def test_add_form_validates_and_creates(self, app, api):
        sign_in(app)
        api.create_object.return_value = ObjectRecord(id="ff80", name="Cargo Box", data={"kg": 20})

        form = app.form_view()
        form.name_text = "C"
        form.payload_text = "[1, 2]"
        assert form.submit() is None
        assert form.errors == {
            "name": "Name must be at least 2 characters long",
            "data": "Please enter valid JSON format",
        }
        api.create_object.assert_not_called()

        form.name_text = "Cargo Box"
        form.payload_text = '{"kg": 20}'
        assert form.submit().result(timeout=5) is True
        api.create_object.assert_called_once_with(ObjectRecord(name="Cargo Box", data={"kg": 20}))
        assert app.list_view().render()[0] == "#ff80 Cargo Box - kg: 20"

    def test_mutations_run_on_worker_threads(self, app, api):
        sign_in(app)
        threads = []

        def create(record):
            threads.append(threading.current_thread().name)
            return ObjectRecord(id="ff80", name=record.name)

        api.create_object.side_effect = create
        form = app.form_view()
        form.name_text = "Cargo Box"

        future = form.submit()

        assert isinstance(future, Future)
        assert future.result(timeout=5) is True
        assert threads[0].startswith("cargopro-task")
        assert threads[0] != threading.current_thread().name

    def test_list_refresh_returns_future(self, app, api):
        sign_in(app)
        api.list_objects.return_value = reserved(3)
        app.list_view().refresh().result(timeout=5)
        assert app.objects.total_objects == 3
        assert api.list_objects.call_count == 2

    def test_detail_reload_error_is_separate_from_list(self, app, api):
        sign_in(app)
        api.get_object.side_effect = NotFound("ff80")
        detail = app.detail_view(ObjectRecord(id="ff80", name="Cargo Box"))

        detail.reload().result(timeout=5)

        assert detail.render() == ["Cargo Box", "! The requested item was not found", "[reload] Try again"]
        assert app.list_view().render()[0] == "#1 Reserved 1 (reserved) - i: 1"

    def test_edit_form_prefills_payload(self, app, api):
        record = ObjectRecord(id="ff80", name="Cargo Box", data={"kg": 20})
        form = app.form_view(editing=record)
        assert form.name_text == "Cargo Box"
        assert form.payload_text == '{\n  "kg": 20\n}'

    def test_detail_of_reserved_object_is_read_only(self, app, api):
        sign_in(app)
        detail = app.detail_view(reserved(1)[0])
        assert not detail.can_modify
        assert detail.render()[-1] == "Reserved object (read-only)"
        assert detail.delete() is None
        api.delete_object.assert_not_called()

    def test_detail_delete_user_object(self, app, api):
        sign_in(app)
        api.create_object.return_value = ObjectRecord(id="ff80", name="Cargo Box")
        app.objects.create_object(ObjectRecord(name="Cargo Box"))
        api.delete_object.return_value = True

        detail = app.detail_view(app.objects.all_objects[0])
        assert detail.can_modify
        assert detail.delete().result(timeout=5) is True
        assert app.objects.selected_object is None
        assert app.objects.total_objects == 13


# ===========================================================================
# Terminal front-end
# ===========================================================================


class TestTerminalShell:
    def test_session(self, app, api):
        from gui.app import TerminalShell

        output = []
        shell = TerminalShell(app, input_fn=lambda _: "quit", output_fn=output.append)

        shell.handle("objects")
        assert output[-1] == "Please sign in first: phone NUMBER, then code CODE"

        shell.handle('phone "+91 99999 99999"')
        shell.handle("code 123456")
        assert app.auth.is_logged_in

        output.clear()
        shell.handle("page 2")
        assert output[-1] == "Page 2/2 - 3 objects"

        api.create_object.return_value = ObjectRecord(id="ff80", name="Crate")
        shell.handle("add Crate '{\"size\": \"L\"}'")
        api.create_object.assert_called_once_with(ObjectRecord(name="Crate", data={"size": "L"}))

        api.delete_object.side_effect = NetworkUnavailable()
        output.clear()
        shell.handle("delete ff80")
        assert output[0].startswith("! Deletion Failed")
        assert app.objects.all_objects[0].id == "ff80"

        assert shell.handle("quit") is False
