"""Minimal element tree and HTML renderer for composed pages.

Pages are plain function components returning :class:`Element` nodes built
with :func:`el`. Headings differ from every other node only by a non-null
``level``; rendering never looks at it, and the auditor never looks at
anything else.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from html import escape
from pathlib import Path
from typing import Any, Callable, Iterable

from .style import style_to_css

HIERARCHY_MODES = {None, "", "none", "warn"}


@dataclass
class Element:
    tag: str
    props: dict[str, Any] = field(default_factory=dict)
    children: list[Any] = field(default_factory=list)
    # Set only for semantic headings; the auditor never inspects `tag`.
    level: int | None = None

    @property
    def is_heading(self) -> bool:
        return self.level is not None

    def to_html(self, *, hierarchy_mode: str | None = None) -> str:
        return to_html(self, hierarchy_mode=hierarchy_mode)


@dataclass
class DocumentArtifact:
    """A page tree plus the metadata written into ``<head>``."""

    root: Element
    title: str
    lang: str = "en"

    def to_html(self, *, hierarchy_mode: str | None = None) -> str:
        return compile_document(self, hierarchy_mode=hierarchy_mode)

    def emit_html(
        self,
        path: str | Path,
        *,
        hierarchy_mode: str | None = None,
        encoding: str = "utf-8",
    ) -> str:
        html = self.to_html(hierarchy_mode=hierarchy_mode)
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(html, encoding=encoding)
        return html


def component(fn: Callable) -> Callable:
    """Mark ``fn`` as a page component."""
    fn.__headings_component__ = True
    return fn


def flatten_children(children: Iterable[Any]) -> list[Any]:
    out: list[Any] = []
    for child in children:
        if isinstance(child, (list, tuple)):
            out.extend(flatten_children(child))
        elif child is not None:
            out.append(child)
    return out


def el(tag: str, *children: Any, **props: Any) -> Element:
    return Element(tag=tag, props=props, children=flatten_children(children))


def _attr_name(name: str) -> str:
    return "class" if name == "class_name" else name.replace("_", "-")


def _attr(name: str, value: Any) -> str | None:
    if value is None or value is False:
        return None
    attr = _attr_name(name)
    if value is True:
        return attr
    text = style_to_css(value) if attr == "style" else str(value)
    if attr == "style" and not text:
        return None
    return f'{attr}="{escape(text, quote=True)}"'


def render_node(node: Any) -> str:
    if node is None:
        return ""
    if isinstance(node, (list, tuple)):
        return "".join(render_node(child) for child in node)
    if not isinstance(node, Element):
        return escape(str(node))
    attrs = [a for a in (_attr(k, v) for k, v in node.props.items()) if a]
    open_tag = " ".join([node.tag, *attrs])
    return f"<{open_tag}>{render_node(node.children)}</{node.tag}>"


def Document(
    *,
    title: str = "untitled page",
    lang: str = "en",
) -> Callable[[Callable[..., Any]], Callable[..., DocumentArtifact]]:
    """Turn a page component into a factory of :class:`DocumentArtifact` rooted at ``<main>``."""

    def decorator(fn: Callable[..., Any]) -> Callable[..., DocumentArtifact]:
        def wrapped(*args: Any, **kwargs: Any) -> DocumentArtifact:
            root = el("main", fn(*args, **kwargs), class_name="page-root", data_role="document-root")
            return DocumentArtifact(root=root, title=title, lang=lang)

        wrapped.__name__ = fn.__name__
        return wrapped

    return decorator


def check_hierarchy(tree: Any, hierarchy_mode: str | None) -> None:
    """Audit ``tree`` and warn for each finding when ``hierarchy_mode`` is ``"warn"``."""
    mode = hierarchy_mode.strip().lower() if isinstance(hierarchy_mode, str) else hierarchy_mode
    if mode not in HIERARCHY_MODES:
        raise ValueError(f"Unsupported hierarchy_mode {hierarchy_mode!r}. Expected None or 'warn'.")
    if mode != "warn":
        return
    from ..auditor import audit
    from ..tracker import warn_violation

    for violation in audit(tree):
        warn_violation(violation, stacklevel=4)


def compile_document(artifact: DocumentArtifact, *, hierarchy_mode: str | None = None) -> str:
    check_hierarchy(artifact, hierarchy_mode)
    lang = (artifact.lang or "").strip() or "en"
    head = (
        '<meta charset="utf-8" />'
        '<meta name="viewport" content="width=device-width, initial-scale=1" />'
        f"<title>{escape(artifact.title)}</title>"
    )
    return (
        f'<!doctype html><html lang="{escape(lang, quote=True)}">'
        f"<head>{head}</head><body>{render_node(artifact.root)}</body></html>"
    )


def to_html(node_or_document: Any, *, hierarchy_mode: str | None = None) -> str:
    if isinstance(node_or_document, DocumentArtifact):
        return compile_document(node_or_document, hierarchy_mode=hierarchy_mode)
    check_hierarchy(node_or_document, hierarchy_mode)
    return render_node(node_or_document)


def mount_component_html(
    node_or_component: Any,
    *,
    props: Any = None,
    title: str = "component mount harness",
    lang: str = "en",
    hierarchy_mode: str | None = None,
) -> str:
    """Render a single component inside a throwaway document for previews and tests."""
    mounted = node_or_component
    if callable(mounted):
        mounted = mounted() if props is None else mounted(props)
    if not isinstance(mounted, DocumentArtifact):
        root = el("main", mounted, class_name="mount-root", data_role="mount-root")
        mounted = DocumentArtifact(root=root, title=title, lang=lang)
    return compile_document(mounted, hierarchy_mode=hierarchy_mode)
