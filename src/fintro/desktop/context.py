"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable, Optional

import flet as ft

from ..config import BaseConfig
from ..infra.database import SessionFactory, bootstrap_database
from ..infra.realtime import ChangeFeed
from ..logging_config import get_logger
from ..models.user import User
from ..services.auth import AuthService
from ..services.finance_store import FinanceStore
from ..viewmodels import AuthViewModel, FinanceViewModel
from ..viewmodels.base import Dispatcher

logger = get_logger(__name__)


@dataclass
class AppContext:
    """Services, view-models and UI state shared by every view."""

    config: BaseConfig
    session_factory: SessionFactory
    change_feed: ChangeFeed
    auth: AuthService
    store: FinanceStore
    auth_vm: AuthViewModel

    clock: Callable[[], datetime] = datetime.now
    dispatch: Optional[Dispatcher] = None
    post: Optional[Dispatcher] = None
    finance_vm: Optional[FinanceViewModel] = None

    page: Optional[ft.Page] = None
    selected_month: Optional[date] = None
    dev_mode: bool = False
    view_cleanups: list[Callable[[], None]] = field(default_factory=list)

    def ensure_finance_vm(self) -> FinanceViewModel:
        """Return the live finance view-model, creating it on first use."""

        if self.finance_vm is None:
            self.finance_vm = FinanceViewModel(
                self.store, clock=self.clock, dispatch=self.dispatch, post=self.post
            )
            self.finance_vm.start()
        return self.finance_vm

    def reset_finance_vm(self) -> None:
        if self.finance_vm is not None:
            self.finance_vm.stop()
            self.finance_vm = None

    def run_view_cleanups(self) -> None:
        """Detach observers registered by the previously shown view."""

        while self.view_cleanups:
            self.view_cleanups.pop()()

    def _on_user_changed(self, user: Optional[User]) -> None:
        # Listeners are bound to one user id; drop them on every change.
        self.reset_finance_vm()


def create_app_context(
    config: Optional[BaseConfig] = None,
    *,
    dispatch: Optional[Dispatcher] = None,
    post: Optional[Dispatcher] = None,
    clock: Callable[[], datetime] = datetime.now,
) -> AppContext:
    """Create and initialize the application context."""

    if config is None:
        config = BaseConfig()

    _engine, session_factory = bootstrap_database(config)

    change_feed = ChangeFeed()
    auth = AuthService(session_factory)
    store = FinanceStore(session_factory, auth, change_feed=change_feed, clock=clock)
    auth_vm = AuthViewModel(auth)
    auth_vm.start()

    ctx = AppContext(
        config=config,
        session_factory=session_factory,
        change_feed=change_feed,
        auth=auth,
        store=store,
        auth_vm=auth_vm,
        clock=clock,
        dispatch=dispatch,
        post=post,
        dev_mode=config.DEV_MODE,
    )
    auth.listen(ctx._on_user_changed)
    logger.debug("App context created", extra={"database_url": config.DATABASE_URL})
    return ctx
