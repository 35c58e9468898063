"""Inline ``style=`` values for heading elements.

Headings carry default typography (weight, tracking) as inline declarations,
and callers may layer their own fragments on top: strings such as
``"color: red"``, mappings such as ``{"font_weight": 600}``, or lists of
either. Later declarations win and move to the end of the rendered string.
"""
from __future__ import annotations

import warnings
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Iterator


class StyleWarning(UserWarning):
    """Warning emitted for inline-style input that had to be dropped."""


def _prop_name(raw: Any) -> str:
    name = str(raw).strip()
    # Custom properties are case-sensitive and keep underscores.
    if name.startswith("--"):
        return name
    return name.replace("_", "-").lower()


def _css_value(prop: str, value: Any) -> str | None:
    if value is None or value is False:
        return None
    if value is True:
        warnings.warn(f"Skipping boolean inline-style value for {prop!r}", StyleWarning, stacklevel=4)
        return None
    if isinstance(value, (list, tuple)):
        value = " ".join(str(v) for v in value if v is not None)
    text = str(value).strip()
    return text or None


def _from_string(text: str) -> Iterator[tuple[str, Any]]:
    for chunk in text.split(";"):
        chunk = chunk.strip()
        if not chunk:
            continue
        name, sep, value = chunk.partition(":")
        if not sep or not name.strip():
            warnings.warn(f"Ignoring malformed inline-style declaration {chunk!r}", StyleWarning, stacklevel=4)
            continue
        yield name, value


def _declarations(fragment: Any) -> Iterator[tuple[str, Any]]:
    if fragment is None or fragment is False:
        return
    if isinstance(fragment, Style):
        yield from fragment.items()
    elif isinstance(fragment, str):
        yield from _from_string(fragment)
    elif isinstance(fragment, Mapping):
        yield from fragment.items()
    elif isinstance(fragment, (list, tuple)):
        for part in fragment:
            yield from _declarations(part)
    else:
        raise TypeError(f"Unsupported inline-style fragment: {type(fragment).__name__}")


@dataclass
class Style:
    declarations: dict[str, str] = field(default_factory=dict)

    def merge(self, *fragments: Any, **props: Any) -> "Style":
        for fragment in (*fragments, props):
            for raw_name, raw_value in _declarations(fragment):
                prop = _prop_name(raw_name)
                value = _css_value(prop, raw_value)
                if not prop or value is None:
                    continue
                self.declarations.pop(prop, None)
                self.declarations[prop] = value
        return self

    def items(self) -> list[tuple[str, str]]:
        return list(self.declarations.items())

    def to_css(self, *, trailing_semicolon: bool = True) -> str:
        body = "; ".join(f"{prop}: {value}" for prop, value in self.declarations.items())
        if body and trailing_semicolon:
            body += ";"
        return body

    @classmethod
    def from_any(cls, *fragments: Any, **props: Any) -> "Style":
        return cls().merge(*fragments, **props)


def style(*fragments: Any, **props: Any) -> Style:
    return Style.from_any(*fragments, **props)


def style_to_css(value: Any, *, trailing_semicolon: bool = True) -> str:
    if isinstance(value, str):
        return value.strip()
    if value is None or value is False:
        return ""
    return Style.from_any(value).to_css(trailing_semicolon=trailing_semicolon)


def merge_style_attr_values(existing: Any, fragment: Any) -> Any:
    """Layer ``fragment`` over a heading's default style value."""
    if not fragment:
        return existing
    if existing in (None, False, ""):
        return fragment.strip() if isinstance(fragment, str) else Style.from_any(fragment)
    return Style.from_any(existing, fragment)
