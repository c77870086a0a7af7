"""View-models bridging the services and the desktop views."""

from .auth import AuthViewModel
from .finance import FinanceViewModel

__all__ = ["AuthViewModel", "FinanceViewModel"]
