"""Authentication and user management services."""

from __future__ import annotations

import re
import threading
from datetime import datetime, timezone
from typing import Callable, Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError
from sqlmodel import select

from ..infra.database import SessionFactory
from ..infra.realtime import Subscription
from ..logging_config import get_logger
from ..models.user import User

logger = get_logger(__name__)

_hasher = PasswordHasher()
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LENGTH = 6

AuthListener = Callable[[Optional[User]], None]


class AuthError(Exception):
    """Sign-in or sign-up failure carrying a message fit for the user."""


class NotAuthenticatedError(RuntimeError):
    """Raised when a user-scoped operation runs without a signed-in user."""

    def __init__(self, message: str = "User is not authenticated"):
        super().__init__(message)


def _normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def get_user_by_email(email: str, session_factory: SessionFactory) -> Optional[User]:
    """Fetch a user by email."""
    email = _normalize_email(email)
    with session_factory() as session:
        return session.exec(select(User).where(User.email == email)).first()


def create_user(
    *,
    email: str,
    password: str,
    display_name: str = "",
    session_factory: SessionFactory,
) -> User:
    """Create a new user with a hashed password."""

    email = _normalize_email(email)
    if not _EMAIL_RE.match(email):
        raise AuthError("The email address is badly formatted.")
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise AuthError(f"The password must be at least {MIN_PASSWORD_LENGTH} characters long.")
    password_hash = _hasher.hash(password)
    with session_factory() as session:
        existing = session.exec(select(User).where(User.email == email)).first()
        if existing:
            raise AuthError("The email address is already in use by another account.")
        user = User(email=email, display_name=display_name.strip(), password_hash=password_hash)
        session.add(user)
        session.commit()
        session.refresh(user)
        return user


def authenticate(*, email: str, password: str, session_factory: SessionFactory) -> Optional[User]:
    """Validate credentials and return the user when correct."""

    email = _normalize_email(email)
    if not email or not password:
        return None
    with session_factory() as session:
        user = session.exec(select(User).where(User.email == email)).first()
        if user is None:
            return None
        try:
            _hasher.verify(user.password_hash, password)
        except (VerifyMismatchError, InvalidHash, VerificationError):
            return None

        if _hasher.check_needs_rehash(user.password_hash):
            user.password_hash = _hasher.hash(password)
        user.last_login = datetime.now(timezone.utc)
        session.add(user)
        session.commit()
        session.refresh(user)
        return user


class AuthService:
    """Holds the signed-in user and tells listeners when it changes."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory
        self._current_user: Optional[User] = None
        self._listeners: list[tuple[Subscription, AuthListener]] = []
        self._lock = threading.RLock()

    @property
    def current_user(self) -> Optional[User]:
        return self._current_user

    def require_user_id(self) -> str:
        """Return the current user id or raise if nobody is signed in."""

        user = self._current_user
        if user is None or not user.id:
            raise NotAuthenticatedError()
        return user.id

    def sign_in(self, email: str, password: str) -> User:
        user = authenticate(email=email, password=password, session_factory=self.session_factory)
        if user is None:
            logger.warning("Sign-in rejected", extra={"email": _normalize_email(email)})
            raise AuthError("The email or password is incorrect.")
        logger.info("User signed in", extra={"user_id": user.id})
        self._set_user(user)
        return user

    def create_account(self, email: str, password: str, display_name: str) -> User:
        """Register a new account and sign it in."""

        user = create_user(
            email=email,
            password=password,
            display_name=display_name,
            session_factory=self.session_factory,
        )
        logger.info("Account created", extra={"user_id": user.id})
        self._set_user(user)
        return user

    def sign_out(self) -> None:
        if self._current_user is None:
            return
        logger.info("User signed out", extra={"user_id": self._current_user.id})
        self._set_user(None)

    def listen(self, listener: AuthListener) -> Subscription:
        """Subscribe to user changes; the current user is delivered at once."""

        def _remove(sub: Subscription) -> None:
            with self._lock:
                self._listeners = [(s, fn) for s, fn in self._listeners if s is not sub]

        subscription = Subscription(_remove)
        with self._lock:
            self._listeners.append((subscription, listener))
        self._emit(listener, self._current_user)
        return subscription

    def _set_user(self, user: Optional[User]) -> None:
        with self._lock:
            self._current_user = user
            listeners = [fn for sub, fn in self._listeners if sub.active]
        for listener in listeners:
            self._emit(listener, user)

    def _emit(self, listener: AuthListener, user: Optional[User]) -> None:
        try:
            listener(user)
        except Exception:
            logger.exception("Auth state listener failed")
