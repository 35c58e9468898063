"""Static heading-hierarchy audit over finished document trees.

The auditor walks a tree depth-first in document order and replays the same
watermark rule the live tracker applies, plus a duplicate-``h1`` check that
only makes sense once the whole document is known. It never warns and never
raises for odd input: unknown nodes are skipped, a tree without headings
yields an empty list.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator

from .rule import (
    DUPLICATE_TOP_LEVEL,
    MAX_LEVEL,
    MIN_LEVEL,
    SKIPPED_LEVEL,
    ViolationReport,
    duplicate_top_level,
    evaluate,
)
from .ui.core import DocumentArtifact, Element


@dataclass(frozen=True)
class HeadingEvent:
    level: int
    source: str | None = None
    identifier: str | None = None

    @property
    def is_top_level(self) -> bool:
        return self.level == 1


def _normalize_tag(tag: Any) -> str:
    return str(tag).strip().lower()


def _valid_level(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and MIN_LEVEL <= value <= MAX_LEVEL


def _element_id(node: Element) -> str | None:
    value = node.props.get("id") if isinstance(node.props, dict) else None
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _element_items(items: Any) -> Iterator[Element]:
    # Nested lists are transparent: their elements are siblings of the list's neighbours.
    for item in items:
        if isinstance(item, Element):
            yield item
        elif isinstance(item, (list, tuple)):
            yield from _element_items(item)


def iter_heading_events(tree: Any) -> Iterator[HeadingEvent]:
    root: Any = tree
    if isinstance(tree, DocumentArtifact):
        root = tree.root

    def visit_siblings(items: Any, path: str) -> Iterator[HeadingEvent]:
        for idx, child in enumerate(_element_items(items), start=1):
            yield from visit(child, f"{path}/{_normalize_tag(child.tag)}[{idx}]")

    def visit(node: Element, path: str) -> Iterator[HeadingEvent]:
        if _valid_level(node.level):
            yield HeadingEvent(level=node.level, source=path, identifier=_element_id(node))
        if isinstance(node.children, (list, tuple)):
            yield from visit_siblings(node.children, path)

    if isinstance(root, Element):
        yield from visit(root, f"/{_normalize_tag(root.tag)}[1]")
    elif isinstance(root, (list, tuple)):
        yield from visit_siblings(root, "/fragment")


def collect_events(tree: Any) -> list[HeadingEvent]:
    return list(iter_heading_events(tree))


def audit_events(events: Iterable[HeadingEvent]) -> list[ViolationReport]:
    violations: list[ViolationReport] = []
    watermark = 0
    top_level_seen = 0
    for event in events:
        found = evaluate(watermark, event.level, source=event.source)
        if found is not None:
            violations.append(found)
        if event.is_top_level:
            top_level_seen += 1
            if top_level_seen > 1:
                violations.append(duplicate_top_level(watermark, top_level_seen, source=event.source))
        watermark = max(watermark, event.level)
    return violations


def audit_levels(levels: Iterable[int]) -> list[ViolationReport]:
    return audit_events(HeadingEvent(level=level, source=f"#{idx}") for idx, level in enumerate(levels, start=1))


def audit(tree: Any) -> list[ViolationReport]:
    return audit_events(iter_heading_events(tree))


def audit_report(tree: Any) -> dict[str, Any]:
    events = collect_events(tree)
    violations = audit_events(events)
    return {
        "ok": not violations,
        "heading_count": len(events),
        "top_level_count": sum(1 for event in events if event.is_top_level),
        "violation_count": len(violations),
        "skipped_level_count": sum(1 for v in violations if v.kind == SKIPPED_LEVEL),
        "duplicate_top_level_count": sum(1 for v in violations if v.kind == DUPLICATE_TOP_LEVEL),
        "violations": [v.to_dict() for v in violations],
    }


class StaticAuditor:
    """Object form of :func:`audit` for callers that inject an auditor."""

    def audit(self, tree: Any) -> list[ViolationReport]:
        return audit(tree)

    def report(self, tree: Any) -> dict[str, Any]:
        return audit_report(tree)
