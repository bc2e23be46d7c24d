"""Phone OTP sign-in controller.

A thin wrapper around an IdentityProvider. The rest of the app only reads
``is_logged_in``.
"""

from __future__ import annotations

import re
from typing import Callable, Optional

from cargopro.errors import AuthError
from cargopro.identity import AuthUser, IdentityProvider
from cargopro.utils.logger import get_logger
from gui.state import Notice, Observable

logger = get_logger(__name__)

# Provider error codes -> user-facing text
AUTH_ERROR_MESSAGES = {
    "INVALID_PHONE_NUMBER": "Please enter a valid phone number",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "Too many attempts. Please try again later",
    "INVALID_CODE": "Invalid verification code. Please try again",
    "SESSION_EXPIRED": "Session expired. Please request a new code",
    "QUOTA_EXCEEDED": "SMS quota exceeded. Please try again later",
    "CAPTCHA_CHECK_FAILED": "reCAPTCHA verification failed. Please try again",
    "INVALID_APP_CREDENTIAL": "Invalid app credentials. Please contact support",
    "INVALID_SESSION_INFO": "Verification session expired. Please restart",
    "MISSING_CODE": "Please enter the verification code",
}


def auth_error_message(error: AuthError) -> str:
    return AUTH_ERROR_MESSAGES.get(error.code, f"Authentication failed: {error.message}")


def is_valid_phone_number(phone: str) -> bool:
    """E.164-ish check: leading '+' and at least 10 digits."""
    cleaned = re.sub(r"[^\d+]", "", phone)
    return cleaned.startswith("+") and len(cleaned) >= 11


def format_phone_number(phone: str) -> str:
    """Mask the last four characters for display."""
    if len(phone) <= 4:
        return phone
    return f"{phone[:-4]}****"


class AuthController(Observable):
    """Send-code / verify-code flow with a development bypass number."""

    def __init__(
        self,
        provider: Optional[IdentityProvider],
        dev_phone_number: str = "+91 99999 99999",
        dev_otp_code: str = "123456",
        notifier: Optional[Callable[[Notice], None]] = None,
    ):
        super().__init__()
        self._provider = provider
        self._dev_phone_number = dev_phone_number
        self._dev_otp_code = dev_otp_code
        self._notifier = notifier

        self.user: Optional[AuthUser] = None
        self.is_loading = False
        self.is_code_sent = False
        self.phone_number = ""
        self.error_message = ""
        self._session_info: Optional[str] = None

    @property
    def is_logged_in(self) -> bool:
        return self.user is not None

    def _notify(self, title: str, message: str, level: str = "info") -> None:
        if self._notifier is not None:
            self._notifier(Notice(title, message, level))

    def _fail(self, title: str, message: str) -> None:
        self.error_message = message
        self._notify(title, message, "error")

    def _require_provider(self) -> IdentityProvider:
        if self._provider is None:
            raise AuthError("provider-not-configured", "No identity provider configured")
        return self._provider

    def send_otp(self, phone_number: str) -> bool:
        """Request an SMS code. Returns True when a code is on its way."""
        self.is_loading = True
        self.phone_number = phone_number
        self.error_message = ""
        self._changed()
        try:
            if phone_number == self._dev_phone_number:
                logger.info("🚀 DEV MODE: skipping SMS for bypass number")
                self.is_code_sent = True
                self._notify("🚀 DEV MODE: OTP Sent", f"Test OTP: {self._dev_otp_code}")
                return True

            self._session_info = self._require_provider().send_verification_code(phone_number)
            self.is_code_sent = True
            self._notify("OTP Sent 📱", f"Verification code has been sent to {phone_number}")
            return True
        except AuthError as exc:
            logger.warning("❌ send_otp failed: %s", exc)
            self._fail("Authentication Error", auth_error_message(exc))
            return False
        finally:
            self.is_loading = False
            self._changed()

    def verify_otp(self, code: str) -> bool:
        """Confirm the SMS code and sign in."""
        self.is_loading = True
        self.error_message = ""
        self._changed()
        try:
            if not code.strip():
                raise AuthError("MISSING_CODE")

            if self.phone_number == self._dev_phone_number:
                if code != self._dev_otp_code:
                    raise AuthError("INVALID_CODE")
                self.user = AuthUser(
                    uid="dev-user", phone_number=self.phone_number, is_development=True
                )
                self._notify("🚀 DEV MODE: Login Success", "Development bypass authentication completed", "success")
            else:
                if self._session_info is None:
                    raise AuthError("INVALID_SESSION_INFO")
                self.user = self._require_provider().sign_in_with_code(self._session_info, code)
                self._notify("Welcome!", "Successfully logged in via SMS", "success")

            logger.info("🔐 Signed in as %s", format_phone_number(self.user.phone_number))
            self._reset_code_state()
            return True
        except AuthError as exc:
            logger.warning("❌ verify_otp failed: %s", exc)
            self._fail("Authentication Error", auth_error_message(exc))
            return False
        finally:
            self.is_loading = False
            self._changed()

    def resend_otp(self) -> bool:
        if not self.phone_number:
            return False
        return self.send_otp(self.phone_number)

    def logout(self) -> None:
        if self._provider is not None:
            self._provider.sign_out()
        self.user = None
        self._reset_code_state()
        self.phone_number = ""
        self._notify("Logged Out", "You have been successfully logged out")
        self._changed()

    def reset_state(self) -> None:
        self._reset_code_state()
        self.phone_number = ""
        self.is_loading = False
        self.error_message = ""
        self._changed()

    def _reset_code_state(self) -> None:
        self.is_code_sent = False
        self._session_info = None
