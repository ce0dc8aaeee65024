"""Exception types raised by the walkthrough steps.

Each walkthrough step aborts on the first error and surfaces the message;
nothing here is retried or recovered from.
"""

from __future__ import annotations


class StatwalkError(Exception):
    """Base class for all walkthrough errors."""


class NotFound(StatwalkError, LookupError):
    """A requested dataset, file, column or geography level does not exist."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "not found"


class InsufficientData(StatwalkError, ValueError):
    """Fewer observations than the estimate requires."""


class SingularDesign(StatwalkError, ValueError):
    """The predictor has no variation, so the regression is undefined."""


def require_columns(df, columns, *, what: str = "table") -> None:
    """Raise :class:`NotFound` unless every name in ``columns`` is in ``df``."""
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise NotFound(
            f"Column(s) {missing} not found in {what}. "
            f"Available columns: {list(df.columns)}"
        )
