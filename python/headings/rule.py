from __future__ import annotations

from dataclasses import dataclass
from typing import Any


SKIPPED_LEVEL = "SKIPPED_LEVEL"
DUPLICATE_TOP_LEVEL = "DUPLICATE_TOP_LEVEL"

VIOLATION_KINDS = {SKIPPED_LEVEL, DUPLICATE_TOP_LEVEL}

MIN_LEVEL = 1
MAX_LEVEL = 6


class HeadingLevelError(ValueError):
    """Raised for heading levels outside 1..6 (a configuration error, not a finding)."""


@dataclass(frozen=True)
class ViolationReport:
    kind: str
    observed_level: int
    prior_level: int
    message: str
    source: str | None = None

    @property
    def suggested_level(self) -> int:
        if self.kind == DUPLICATE_TOP_LEVEL:
            return 2
        return min(self.prior_level + 1, MAX_LEVEL)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.kind,
            "severity": "warning",
            "message": self.message,
            "path": self.source or "/document",
            "observed_level": self.observed_level,
            "prior_level": self.prior_level,
            "suggested_level": self.suggested_level,
        }


def coerce_level(value: Any, *, allow_zero: bool = False) -> int:
    low = 0 if allow_zero else MIN_LEVEL
    if isinstance(value, bool) or not isinstance(value, int):
        raise HeadingLevelError(f"Heading level must be an integer, got {value!r}")
    if value < low or value > MAX_LEVEL:
        raise HeadingLevelError(f"Heading level must be between {low} and {MAX_LEVEL}, got {value}")
    return value


def next_level(depth: int) -> int:
    return min(coerce_level(depth, allow_zero=True) + 1, MAX_LEVEL)


def evaluate(prior_level: int, observed_level: int, *, source: str | None = None) -> ViolationReport | None:
    """Check one heading against the deepest level reached before it.

    A prior level of 0 means nothing was registered yet; the first heading may
    start at any level. Otherwise a heading more than one level deeper than
    ``prior_level`` is a skip. Returning to a shallower level is always legal.
    """
    prior = coerce_level(prior_level, allow_zero=True)
    observed = coerce_level(observed_level)
    if prior == 0 or observed <= prior + 1:
        return None
    return ViolationReport(
        kind=SKIPPED_LEVEL,
        observed_level=observed,
        prior_level=prior,
        message=(
            f"Heading hierarchy violation: jumping from H{prior} to H{observed}. "
            f"Consider using H{prior + 1} instead."
        ),
        source=source,
    )


def duplicate_top_level(prior_level: int, occurrence: int, *, source: str | None = None) -> ViolationReport:
    prior = coerce_level(prior_level, allow_zero=True)
    return ViolationReport(
        kind=DUPLICATE_TOP_LEVEL,
        observed_level=1,
        prior_level=prior,
        message=(
            f"Duplicate top-level heading: H1 #{occurrence} found. "
            "A document should have exactly one H1; consider H2 for this section."
        ),
        source=source,
    )
