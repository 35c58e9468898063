from .core import (
    Document,
    DocumentArtifact,
    Element,
    check_hierarchy,
    compile_document,
    component,
    el,
    mount_component_html,
    render_node,
    to_html,
)
from .heading import H1, H2, H3, H4, H5, H6, HEADING_CLASSES, HEADING_STYLES, Heading, Section
from .style import Style, StyleWarning, merge_style_attr_values, style, style_to_css

__all__ = [
    "Document",
    "DocumentArtifact",
    "Element",
    "H1",
    "H2",
    "H3",
    "H4",
    "H5",
    "H6",
    "HEADING_CLASSES",
    "HEADING_STYLES",
    "Heading",
    "Section",
    "Style",
    "StyleWarning",
    "check_hierarchy",
    "compile_document",
    "component",
    "el",
    "merge_style_attr_values",
    "mount_component_html",
    "render_node",
    "style",
    "style_to_css",
    "to_html",
]
