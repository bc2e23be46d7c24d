"""Signed-in landing view."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from gui.controllers.auth_controller import AuthController
from gui.views.base import BaseView


@dataclass
class HomeView(BaseView):
    auth: Optional[AuthController] = None
    name: str = "home"

    def render(self) -> List[str]:
        phone = self.auth.user.phone_number if self.auth and self.auth.user else "Unknown"
        return [
            "Welcome!",
            f"Phone: {phone or 'Unknown'}",
            "[objects] View Objects",
            "[add] Add Object",
            "[logout] Logout",
        ]
