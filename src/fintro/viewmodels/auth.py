"""Login / registration state for the auth screens."""

from __future__ import annotations

from typing import Optional

from ..infra.realtime import Subscription
from ..logging_config import get_logger
from ..models.user import User
from ..services.auth import AuthError, AuthService
from .base import ObservableViewModel

logger = get_logger(__name__)


class AuthViewModel(ObservableViewModel):
    """Form inputs, current session and the last auth error message."""

    def __init__(self, auth: AuthService):
        super().__init__()
        self.auth = auth
        self.email = ""
        self.password = ""
        self.full_name = ""
        self.user_session: Optional[User] = None
        self.error_message: Optional[str] = None
        self._subscription: Optional[Subscription] = None

    def start(self) -> None:
        """Follow the auth service's current user."""
        if self._subscription is None:
            self._subscription = self.auth.listen(self._on_user_changed)

    def stop(self) -> None:
        if self._subscription is not None:
            self._subscription.cancel()
            self._subscription = None

    @property
    def is_signed_in(self) -> bool:
        return self.user_session is not None

    def _on_user_changed(self, user: Optional[User]) -> None:
        self.user_session = user
        self.notify_observers()

    def login(self) -> bool:
        try:
            self.auth.sign_in(self.email, self.password)
        except AuthError as exc:
            return self._fail(str(exc))
        self.clear_inputs()
        return True

    def register(self) -> bool:
        try:
            self.auth.create_account(self.email, self.password, self.full_name)
        except AuthError as exc:
            return self._fail(str(exc))
        self.clear_inputs()
        return True

    def logout(self) -> bool:
        try:
            self.auth.sign_out()
        except Exception as exc:
            logger.exception("Sign-out failed")
            return self._fail(str(exc))
        self.clear_inputs()
        return True

    def clear_inputs(self) -> None:
        self.email = ""
        self.password = ""
        self.full_name = ""
        self.error_message = None
        self.notify_observers()

    def _fail(self, message: str) -> bool:
        self.error_message = message
        self.notify_observers()
        return False
