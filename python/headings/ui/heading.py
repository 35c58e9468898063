from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..rule import coerce_level, next_level
from .core import Element, component, el, flatten_children
from .style import merge_style_attr_values

if TYPE_CHECKING:
    from ..tracker import HierarchyScope


HEADING_CLASSES = {
    1: "text-4xl md:text-6xl lg:text-8xl font-black tracking-tight",
    2: "text-3xl md:text-5xl lg:text-6xl font-black",
    3: "text-2xl md:text-3xl font-bold",
    4: "text-xl md:text-2xl font-bold",
    5: "text-lg md:text-xl font-semibold",
    6: "text-base md:text-lg font-semibold",
}

HEADING_STYLES = {
    1: {"font_weight": 900, "letter_spacing": "-0.025em"},
    2: {"font_weight": 900},
    3: {"font_weight": 700},
    4: {"font_weight": 700},
    5: {"font_weight": 600},
    6: {"font_weight": 600},
}


def _merge_classes(*parts: Any) -> str:
    values: list[str] = []
    for part in parts:
        if not part:
            continue
        text = str(part).strip()
        if text:
            values.append(text)
    return " ".join(values)


def _apply_class(props: dict[str, Any], base_class: str | None, class_name: str | None) -> None:
    existing = props.pop("class_name", None)
    merged = _merge_classes(existing, base_class, class_name)
    if merged:
        props["class_name"] = merged


@component
def Heading(
    content: Any,
    *,
    level: int = 2,
    scope: HierarchyScope | None = None,
    auto_level: bool = False,
    id: str | None = None,
    class_name: str | None = None,
    style: Any = None,
    stacklevel: int = 1,
    **props: Any,
) -> Element:
    if auto_level and scope is not None:
        actual = next_level(scope.current_depth)
    else:
        actual = coerce_level(level)
    if scope is not None:
        scope.register(actual, identifier=id, stacklevel=stacklevel + 1)
    _apply_class(props, HEADING_CLASSES[actual], class_name)
    props["style"] = merge_style_attr_values(dict(HEADING_STYLES[actual]), style)
    if id is not None:
        props["id"] = id
    return Element(tag=f"h{actual}", props=props, children=flatten_children((content,)), level=actual)


@component
def H1(content: Any, *, stacklevel: int = 1, **props: Any) -> Element:
    return Heading(content, level=1, stacklevel=stacklevel + 1, **props)


@component
def H2(content: Any, *, stacklevel: int = 1, **props: Any) -> Element:
    return Heading(content, level=2, stacklevel=stacklevel + 1, **props)


@component
def H3(content: Any, *, stacklevel: int = 1, **props: Any) -> Element:
    return Heading(content, level=3, stacklevel=stacklevel + 1, **props)


@component
def H4(content: Any, *, stacklevel: int = 1, **props: Any) -> Element:
    return Heading(content, level=4, stacklevel=stacklevel + 1, **props)


@component
def H5(content: Any, *, stacklevel: int = 1, **props: Any) -> Element:
    return Heading(content, level=5, stacklevel=stacklevel + 1, **props)


@component
def H6(content: Any, *, stacklevel: int = 1, **props: Any) -> Element:
    return Heading(content, level=6, stacklevel=stacklevel + 1, **props)


HEADINGS_BY_LEVEL = {1: H1, 2: H2, 3: H3, 4: H4, 5: H5, 6: H6}


@component
def Section(
    *children: Any,
    heading: Any = None,
    heading_level: int = 2,
    heading_id: str | None = None,
    scope: HierarchyScope | None = None,
    class_name: str | None = None,
    **props: Any,
) -> Element:
    """Section container with an optional heading.

    Arguments are evaluated before this call, so scoped children passed as
    elements would register ahead of the section heading. Pass them as
    zero-argument callables instead; they are invoked after the heading
    registers, keeping registration in document order.
    """
    _apply_class(props, "ui-section", class_name)
    nodes: list[Any] = []
    if heading is not None:
        nodes.append(Heading(heading, level=heading_level, id=heading_id, scope=scope, stacklevel=2))
    for child in children:
        nodes.append(child() if callable(child) else child)
    return el("section", nodes, **props)
