from __future__ import annotations

from dataclasses import dataclass

from fxgate.domain.models import Sink


@dataclass(frozen=True)
class Classification:
    sink: Sink
    is_error_class: bool = False
    is_warning_class: bool = False


def classify(raw_level: str | None, fail_on_error: bool, fail_on_warning: bool) -> Classification:
    """Route one issue by its reported level.

    Levels are open-ended strings ("Error", "CriticalError", "Warning",
    "CriticalWarning", ...), so only the suffix matters. The error test runs
    first: "CriticalError" must never fall through to the warning branch.
    Anything else lands in the warning sink without setting a flag.
    """
    level = (raw_level or "").upper()

    if level.endswith("ERROR"):
        return Classification(
            sink="error" if fail_on_error else "warning",
            is_error_class=True,
        )

    if level.endswith("WARNING"):
        return Classification(
            sink="error" if fail_on_warning else "warning",
            is_warning_class=True,
        )

    return Classification(sink="warning")
