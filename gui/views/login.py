"""Phone number + SMS code login view."""

from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import List, Optional

from gui.controllers.auth_controller import (
    AuthController,
    format_phone_number,
    is_valid_phone_number,
)
from gui.views.base import BaseView


def validate_phone(value: str) -> Optional[str]:
    if not value or not value.strip():
        return "Please enter your phone number"
    if not is_valid_phone_number(value):
        return "Please enter a valid phone number with country code"
    return None


def validate_code(value: str) -> Optional[str]:
    if not value or not value.strip():
        return "Please enter the verification code"
    if len(value.strip()) != 6:
        return "Please enter a 6-digit code"
    return None


@dataclass
class LoginView(BaseView):
    auth: Optional[AuthController] = None
    name: str = "login"
    field_error: Optional[str] = field(default=None)

    def submit_phone(self, phone: str) -> Optional[Future]:
        """Validate and request a code. Returns None when the input is rejected."""
        self.field_error = validate_phone(phone)
        if self.field_error:
            return None
        return self.submit_task(self.auth.send_otp, phone.strip())

    def submit_code(self, code: str) -> Optional[Future]:
        self.field_error = validate_code(code)
        if self.field_error:
            return None
        return self.submit_task(self.auth.verify_otp, code.strip())

    def render(self) -> List[str]:
        lines = ["Phone Login"]
        if self.auth.is_code_sent:
            lines.append(
                f"Enter the 6-digit code sent to {format_phone_number(self.auth.phone_number)}"
            )
        else:
            lines.append("Enter your phone number with country code")
        if self.auth.is_loading:
            lines.append("Sending..." if not self.auth.is_code_sent else "Verifying...")
        for message in (self.field_error, self.auth.error_message):
            if message:
                lines.append(f"! {message}")
        return lines
