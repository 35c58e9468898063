# SPDX-License-Identifier: AGPL-3.0-only
"""Heading hierarchy tracking and auditing for composed documents.

A page renders its sections against one :class:`HierarchyScope`; every
`H1`..`H6` emission registers its level with the scope and receives a
violation report when it skips a level. :func:`audit` re-derives the same
findings from a finished tree, and additionally reports duplicate `h1`s.
"""
from .auditor import HeadingEvent, StaticAuditor, audit, audit_events, audit_levels, audit_report
from .rule import (
    DUPLICATE_TOP_LEVEL,
    SKIPPED_LEVEL,
    HeadingLevelError,
    ViolationReport,
    coerce_level,
    evaluate,
)
from .tracker import (
    HeadingHierarchyWarning,
    HierarchyScope,
    commit,
    create_scope,
    register,
    reset,
)

__version__ = "0.1.0"

__all__ = [
    "DUPLICATE_TOP_LEVEL",
    "HeadingEvent",
    "HeadingHierarchyWarning",
    "HeadingLevelError",
    "HierarchyScope",
    "SKIPPED_LEVEL",
    "StaticAuditor",
    "ViolationReport",
    "audit",
    "audit_events",
    "audit_levels",
    "audit_report",
    "coerce_level",
    "commit",
    "create_scope",
    "evaluate",
    "register",
    "reset",
]
