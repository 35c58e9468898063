from __future__ import annotations

import pytest

from headings import HeadingLevelError, create_scope
from headings.ui import (
    H1,
    H2,
    H3,
    H4,
    H5,
    H6,
    HEADING_CLASSES,
    Heading,
    Section,
    el,
    render_node,
)


@pytest.mark.parametrize(
    "factory, level",
    [(H1, 1), (H2, 2), (H3, 3), (H4, 4), (H5, 5), (H6, 6)],
)
def test_per_level_wrappers_emit_typed_heading(factory, level: int) -> None:
    node = factory("Title")
    assert node.tag == f"h{level}"
    assert node.level == level
    assert node.is_heading
    assert node.children == ["Title"]
    assert node.props["class_name"] == HEADING_CLASSES[level]


def test_h1_renders_default_classes_style_and_id() -> None:
    html = render_node(H1("Main title", id="main-title"))
    assert html == (
        '<h1 class="text-4xl md:text-6xl lg:text-8xl font-black tracking-tight" '
        'style="font-weight: 900; letter-spacing: -0.025em;" id="main-title">Main title</h1>'
    )


def test_class_override_composes_with_default() -> None:
    node = H1("Test", class_name="text-red-500 custom-class")
    classes = node.props["class_name"].split()
    assert "text-red-500" in classes and "custom-class" in classes
    assert "font-black" in classes and "tracking-tight" in classes


def test_style_override_composes_with_default() -> None:
    html = render_node(H3("Plans", style={"color": "#ccff00"}))
    assert 'style="font-weight: 700; color: #ccff00;"' in html

    html = render_node(H3("Plans", style="font-weight: 400"))
    assert 'style="font-weight: 400;"' in html


def test_heading_without_id_has_no_id_attr() -> None:
    assert " id=" not in render_node(H2("Anchorless"))


def test_heading_rejects_out_of_range_level() -> None:
    with pytest.raises(HeadingLevelError):
        Heading("Bad", level=7)
    with pytest.raises(HeadingLevelError):
        Heading("Bad", level=0)


def test_invalid_level_is_not_registered() -> None:
    scope = create_scope()
    with pytest.raises(HeadingLevelError):
        Heading("Bad", level=9, scope=scope)
    assert scope.events == []


def test_heading_registers_with_scope_at_emission() -> None:
    scope = create_scope()
    H1("Home", scope=scope)
    H2("Plans", scope=scope, id="plans")
    H4("Too deep", scope=scope)
    assert [e.level for e in scope.events] == [1, 2, 4]
    assert scope.events[1].identifier == "plans"
    assert [(v.observed_level, v.prior_level) for v in scope.violations] == [(4, 2)]


def test_heading_without_scope_does_not_register() -> None:
    scope = create_scope()
    H2("Loose")
    assert scope.events == []


def test_auto_level_follows_scope_watermark() -> None:
    scope = create_scope()
    first = Heading("Page", auto_level=True, scope=scope)
    second = Heading("Section", auto_level=True, scope=scope)
    third = Heading("Sub", auto_level=True, scope=scope)
    assert [n.level for n in (first, second, third)] == [1, 2, 3]
    assert scope.violations == []


def test_auto_level_caps_at_six() -> None:
    scope = create_scope(initial_depth=6)
    assert Heading("Deep", auto_level=True, scope=scope).tag == "h6"


def test_auto_level_without_scope_uses_explicit_level() -> None:
    assert Heading("x", level=4, auto_level=True).level == 4


def test_section_places_heading_before_children() -> None:
    node = Section(el("p", "Body"), heading="Overview", heading_level=2, heading_id="overview")
    html = render_node(node)
    assert html.startswith('<section class="ui-section"><h2 ')
    assert 'id="overview"' in html
    assert html.endswith("<p>Body</p></section>")
    assert node.children[0].level == 2


def test_section_without_heading_is_plain_container() -> None:
    node = Section(el("p", "x"), class_name="faq")
    assert render_node(node) == '<section class="ui-section faq"><p>x</p></section>'
