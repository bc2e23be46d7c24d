"""
Phone identity provider - send and confirm SMS verification codes.

The app only needs a yes/no "signed in" signal from this module. The concrete
provider talks to the Firebase Identity Toolkit REST API.
"""
from dataclasses import dataclass
from typing import Optional

import requests

from .config import get_settings
from .errors import AuthError
from .utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class AuthUser:
    """A signed-in user as reported by the identity provider."""

    uid: str
    phone_number: str
    id_token: Optional[str] = None
    refresh_token: Optional[str] = None
    is_development: bool = False


class IdentityProvider:
    """Send-code / confirm-code handshake. Subclasses talk to a real service."""

    def send_verification_code(self, phone_number: str) -> str:
        """Send an SMS code and return the opaque session info needed to confirm it."""
        raise NotImplementedError

    def sign_in_with_code(self, session_info: str, code: str) -> AuthUser:
        raise NotImplementedError

    def sign_out(self) -> None:
        return None


class FirebasePhoneIdentityProvider(IdentityProvider):
    """
    Phone sign-in through the Identity Toolkit REST API.

    Handles:
    - accounts:sendVerificationCode (returns sessionInfo)
    - accounts:signInWithPhoneNumber (returns idToken / refreshToken)
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        recaptcha_token: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the provider.

        Args:
            api_key: Firebase web API key (or set FIREBASE_WEB_API_KEY env var)
            base_url: Identity Toolkit base URL (override for the emulator)
            recaptcha_token: reCAPTCHA token required outside test phone numbers
            session: requests.Session to reuse
        """
        settings = get_settings()
        self.api_key = api_key or settings.firebase_api_key
        self.base_url = (base_url or settings.identity_base_url).rstrip("/")
        self.recaptcha_token = recaptcha_token
        self.session = session or requests.Session()

        if not self.api_key:
            raise ValueError(
                "FIREBASE_WEB_API_KEY must be set. "
                "Find it under Project settings in the Firebase console"
            )

    def _post(self, method: str, payload: dict) -> dict:
        url = f"{self.base_url}/accounts:{method}"
        try:
            response = self.session.post(url, params={"key": self.api_key}, json=payload)
        except requests.RequestException as exc:
            raise AuthError("network-request-failed", str(exc)) from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise AuthError("invalid-response", response.text) from exc

        if response.status_code != 200:
            # Errors look like {"error": {"message": "INVALID_CODE : details"}}
            message = (data.get("error") or {}).get("message", "") if isinstance(data, dict) else ""
            code = message.split(" ")[0] if message else f"http-{response.status_code}"
            logger.warning("Identity %s failed: %s", method, message or response.status_code)
            raise AuthError(code, message)
        return data

    def send_verification_code(self, phone_number: str) -> str:
        payload = {"phoneNumber": phone_number}
        if self.recaptcha_token:
            payload["recaptchaToken"] = self.recaptcha_token
        data = self._post("sendVerificationCode", payload)
        logger.info("📤 Verification code sent")
        return data["sessionInfo"]

    def sign_in_with_code(self, session_info: str, code: str) -> AuthUser:
        data = self._post(
            "signInWithPhoneNumber", {"sessionInfo": session_info, "code": code}
        )
        logger.info("🔐 Phone sign-in succeeded")
        return AuthUser(
            uid=data.get("localId", ""),
            phone_number=data.get("phoneNumber", ""),
            id_token=data.get("idToken"),
            refresh_token=data.get("refreshToken"),
        )
