"""Chart helpers for Flet views."""

from __future__ import annotations

import threading
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Optional, Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.ticker as mticker

from ..services.balances import MonthlyBalance

POSITIVE_COLOR = "#43A047"
NEGATIVE_COLOR = "#E53935"

# pyplot keeps global figure state.
_pyplot_lock = threading.Lock()


def _save(fig) -> Path:
    with NamedTemporaryFile(delete=False, suffix=".png", prefix="fintro-chart-") as tmp:
        fig.savefig(tmp.name, bbox_inches="tight", dpi=100)
        path = Path(tmp.name)
    plt.close(fig)
    return path


def discard_chart(path: Optional[Path]) -> None:
    """Delete a PNG produced by this module; missing files are ignored."""

    if path is not None:
        path.unlink(missing_ok=True)


def monthly_balance_chart_png(
    history: Sequence[MonthlyBalance], *, months: int = 12, currency_symbol: str = "$"
) -> Path:
    """Render end-of-month balances as bars, oldest month on the left.

    The caller owns the returned file and should hand it to
    ``discard_chart`` once it is no longer displayed.
    """

    recent = sorted(history, key=lambda summary: summary.month)[-months:]

    with _pyplot_lock:
        if not recent:
            fig, ax = plt.subplots(figsize=(8, 3))
            ax.text(0.5, 0.5, "No monthly activity yet\nAdd a paycheck or an expense to start",
                    ha="center", va="center", fontsize=12, color="#999")
            ax.axis("off")
            return _save(fig)

        labels = [summary.month.strftime("%b %y") for summary in recent]
        values = [float(summary.balance) for summary in recent]
        colors = [POSITIVE_COLOR if value >= 0 else NEGATIVE_COLOR for value in values]

        fig, ax = plt.subplots(figsize=(8, 3))
        ax.bar(labels, values, color=colors, width=0.6)
        ax.axhline(0, color="#9E9E9E", linewidth=0.8)
        ax.yaxis.set_major_formatter(mticker.FuncFormatter(lambda v, _: f"{currency_symbol}{v:,.0f}"))
        ax.set_title("Monthly balance", fontsize=12, fontweight="bold")
        ax.spines["top"].set_visible(False)
        ax.spines["right"].set_visible(False)
        ax.grid(axis="y", alpha=0.3)
        fig.tight_layout()
        return _save(fig)
