from __future__ import annotations

import warnings

import pytest

from headings import (
    DUPLICATE_TOP_LEVEL,
    SKIPPED_LEVEL,
    StaticAuditor,
    audit,
    audit_levels,
    audit_report,
    create_scope,
    register,
)
from headings.auditor import collect_events
from headings.ui import H1, H2, H3, H4, Document, Element, Heading, el


def _tree(levels: list[int]) -> Element:
    return el("main", [Heading(f"Heading {i}", level=level) for i, level in enumerate(levels)])


def _kinds(violations) -> list[str]:
    return [v.kind for v in violations]


def test_legal_nested_sequence_has_no_violations() -> None:
    assert audit(_tree([1, 2, 3, 2, 3])) == []


def test_skip_from_one_to_four() -> None:
    found = audit(_tree([1, 4]))
    assert _kinds(found) == [SKIPPED_LEVEL]
    assert (found[0].observed_level, found[0].prior_level) == (4, 1)
    assert found[0].suggested_level == 2


def test_relative_start_is_allowed_but_later_skip_is_not() -> None:
    found = audit(_tree([2, 4]))
    assert _kinds(found) == [SKIPPED_LEVEL]
    assert found[0].observed_level == 4


def test_duplicate_top_level_without_skip() -> None:
    found = audit(_tree([1, 2, 1]))
    assert _kinds(found) == [DUPLICATE_TOP_LEVEL]
    assert found[0].prior_level == 2


def test_one_extra_report_per_additional_h1() -> None:
    assert _kinds(audit(_tree([1]))) == []
    assert _kinds(audit(_tree([1, 1]))) == [DUPLICATE_TOP_LEVEL]
    assert _kinds(audit(_tree([1, 2, 1, 2, 1]))) == [DUPLICATE_TOP_LEVEL, DUPLICATE_TOP_LEVEL]


def test_watermark_case_is_flagged_against_deepest_level() -> None:
    found = audit(_tree([1, 3, 2, 5]))
    assert [(v.observed_level, v.prior_level) for v in found] == [(3, 1), (5, 3)]


@pytest.mark.parametrize(
    "levels",
    [
        [1, 2, 3, 4, 5, 6],
        [1, 2, 2, 3, 1, 2],
        [2, 3, 1, 2, 3, 4],
        [3, 4, 2, 3],
        [1, 2, 3, 4, 2, 5, 6],
        [1, 3, 2, 5],
        [2, 4, 1, 6, 3],
    ],
)
def test_tracker_and_auditor_agree(levels: list[int]) -> None:
    scope = create_scope()
    live = [v for v in (register(scope, level) for level in levels) if v is not None]
    static = [v for v in audit(_tree(levels)) if v.kind == SKIPPED_LEVEL]
    assert [(v.observed_level, v.prior_level) for v in live] == [
        (v.observed_level, v.prior_level) for v in static
    ]


def test_document_order_is_depth_first() -> None:
    tree = el(
        "main",
        el("header", H1("Title")),
        el(
            "section",
            H2("A"),
            el("div", el("article", H3("A.1"), H4("A.1.a"))),
            H3("A.2"),
        ),
        el("section", H2("B")),
    )
    assert [e.level for e in collect_events(tree)] == [1, 2, 3, 4, 3, 2]
    assert audit(tree) == []


def test_non_heading_nodes_are_transparent() -> None:
    tree = el("main", "text", None, el("h3", "raw tag without level"), el("div", H1("Only")), 42)
    assert [e.level for e in collect_events(tree)] == [1]


def test_event_sources_and_identifiers() -> None:
    tree = el("main", el("section", H2("Plans", id="services")))
    (event,) = collect_events(tree)
    assert event.source == "/main[1]/section[1]/h2[1]"
    assert event.identifier == "services"
    assert not event.is_top_level


def test_fragment_sources_are_indexed_like_element_children() -> None:
    events = collect_events([H1("Home"), el("p", "intro"), [H2("Plans"), el("section", H3("Monthly"))]])
    assert [e.source for e in events] == [
        "/fragment/h1[1]",
        "/fragment/h2[3]",
        "/fragment/section[4]/h3[1]",
    ]


def test_nested_child_lists_share_sibling_indexes() -> None:
    tree = el("main", H1("Home"))
    tree.children.append([H2("Plans"), H2("FAQ")])
    assert [e.source for e in collect_events(tree)] == [
        "/main[1]/h1[1]",
        "/main[1]/h2[2]",
        "/main[1]/h2[3]",
    ]


def test_malformed_trees_never_raise() -> None:
    assert audit(None) == []
    assert audit("just text") == []
    assert audit([]) == []
    assert audit(Element(tag="div", children=None)) == []  # type: ignore[arg-type]
    assert audit(Element(tag="h9", level=9)) == []
    assert audit([H1("a"), [H2("b")], object()]) == []


def test_audit_accepts_document_artifact() -> None:
    @Document(title="Audit")
    def page() -> object:
        return [H1("Home"), H3("Too deep")]

    found = audit(page())
    assert _kinds(found) == [SKIPPED_LEVEL]
    assert found[0].source == "/main[1]/h3[2]"


def test_audit_is_idempotent_and_silent() -> None:
    tree = _tree([1, 4, 1, 6])
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        first = audit(tree)
        second = audit(tree)
    assert first == second
    assert len(first) == 3
    assert caught == []


def test_audit_does_not_touch_live_scopes() -> None:
    scope = create_scope()
    tree = el("main", H1("A", scope=scope), H2("B", scope=scope))
    before = (scope.current_depth, list(scope.events))
    audit(tree)
    assert (scope.current_depth, list(scope.events)) == before


def test_audit_levels_uses_same_rule() -> None:
    found = audit_levels([1, 2, 5, 1])
    assert _kinds(found) == [SKIPPED_LEVEL, DUPLICATE_TOP_LEVEL]
    assert found[0].source == "#3"


def test_audit_report_summary() -> None:
    report = audit_report(_tree([1, 3, 1]))
    assert report["ok"] is False
    assert report["heading_count"] == 3
    assert report["top_level_count"] == 2
    assert report["violation_count"] == 2
    assert report["skipped_level_count"] == 1
    assert report["duplicate_top_level_count"] == 1
    assert {d["code"] for d in report["violations"]} == {SKIPPED_LEVEL, DUPLICATE_TOP_LEVEL}


def test_empty_report_is_ok() -> None:
    report = StaticAuditor().report(el("div"))
    assert report["ok"] is True
    assert report["violations"] == []
    assert StaticAuditor().audit(_tree([1, 2])) == []

