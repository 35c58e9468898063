"""Render-time heading tracking for one document composition.

A :class:`HierarchyScope` is created per page render and passed explicitly to
every heading emission. It keeps a watermark: the deepest level registered so
far. Each registration is checked against the watermark, not against the
previous heading, so ``[1, 3, 2, 5]`` is flagged at 5 relative to 3.

Violations are always returned. Whether they are also surfaced as
:class:`HeadingHierarchyWarning` depends on the scope's diagnostics mode
(``"warn"`` in development, silent otherwise). A scope created without an
explicit mode takes it from :meth:`Config.get_diagnostics_mode` of the
``headings.toml`` discovered in the working directory.
"""
from __future__ import annotations

import threading
import warnings
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator

from .auditor import HeadingEvent, iter_heading_events
from .config import Config, normalize_mode
from .rule import ViolationReport, coerce_level, evaluate


class HeadingHierarchyWarning(UserWarning):
    pass


def warn_violation(violation: ViolationReport, *, stacklevel: int = 3) -> None:
    where = f" ({violation.source})" if violation.source else ""
    warnings.warn(
        f"{violation.kind}: {violation.message}{where}",
        HeadingHierarchyWarning,
        stacklevel=stacklevel,
    )


@dataclass
class HierarchyScope:
    initial_depth: int = 0
    mode: str | None = None
    name: str | None = None
    current_depth: int = field(init=False)
    events: list[HeadingEvent] = field(init=False, default_factory=list)
    violations: list[ViolationReport] = field(init=False, default_factory=list)
    _lock: threading.Lock = field(init=False, repr=False, compare=False, default_factory=threading.Lock)

    def __post_init__(self) -> None:
        self.initial_depth = coerce_level(self.initial_depth, allow_zero=True)
        if self.mode is None:
            self.mode = Config.discover().get_diagnostics_mode()
        else:
            self.mode = normalize_mode(self.mode)
        self.current_depth = self.initial_depth

    def register(
        self,
        level: int,
        *,
        source: str | None = None,
        identifier: str | None = None,
        stacklevel: int = 1,
    ) -> ViolationReport | None:
        """Register one emitted heading; ``stacklevel`` counts frames above the caller, as in ``warnings.warn``."""
        level = coerce_level(level)
        with self._lock:
            violation = evaluate(self.current_depth, level, source=source)
            self.current_depth = max(self.current_depth, level)
            self.events.append(HeadingEvent(level=level, source=source, identifier=identifier))
            if violation is not None:
                self.violations.append(violation)
        if violation is not None and self.mode == "warn":
            warn_violation(violation, stacklevel=stacklevel + 2)
        return violation

    def reset(self) -> None:
        with self._lock:
            self.current_depth = self.initial_depth
            self.events = []
            self.violations = []

    @contextmanager
    def begin_pass(self) -> Iterator["HierarchyScope"]:
        """Start a committed render pass from a clean watermark."""
        self.reset()
        yield self

    def commit(self, tree: Any) -> list[ViolationReport]:
        self.reset()
        found: list[ViolationReport] = []
        for event in iter_heading_events(tree):
            violation = self.register(
                event.level, source=event.source, identifier=event.identifier, stacklevel=2
            )
            if violation is not None:
                found.append(violation)
        return found


def create_scope(
    initial_depth: int = 0,
    *,
    mode: str | None = None,
    name: str | None = None,
) -> HierarchyScope:
    return HierarchyScope(initial_depth=initial_depth, mode=mode, name=name)


def register(
    scope: HierarchyScope,
    level: int,
    *,
    source: str | None = None,
    identifier: str | None = None,
) -> ViolationReport | None:
    return scope.register(level, source=source, identifier=identifier, stacklevel=2)


def reset(scope: HierarchyScope) -> None:
    scope.reset()


def commit(scope: HierarchyScope, tree: Any) -> list[ViolationReport]:
    return scope.commit(tree)
