from __future__ import annotations

import ast
import re
from dataclasses import dataclass, field
from html.parser import HTMLParser
from pathlib import Path
from typing import Any, Callable, Iterable

from .auditor import HeadingEvent, audit_events
from .rule import DUPLICATE_TOP_LEVEL, ViolationReport
from .ui.core import Element

HTML_EXTENSIONS = {".html", ".htm"}
PYTHON_EXTENSIONS = {".py"}
JSX_EXTENSIONS = {".jsx", ".tsx"}

VOID_TAGS = {
    "area",
    "base",
    "br",
    "col",
    "embed",
    "hr",
    "img",
    "input",
    "link",
    "meta",
    "param",
    "source",
    "track",
    "wbr",
}

_HEADING_TAG_RE = re.compile(r"^h([1-6])$")
_JSX_HEADING_RE = re.compile(r"<[hH]([1-6])(?=[\s/>])")
_HEADING_COMPONENTS = {f"H{n}": n for n in range(1, 7)}


def _tag_level(tag: str) -> int | None:
    m = _HEADING_TAG_RE.match(tag)
    return int(m.group(1)) if m else None


class _TreeBuilder(HTMLParser):
    def __init__(self, source: str | None = None) -> None:
        super().__init__(convert_charrefs=True)
        self.source = source
        self.root = Element(tag="document")
        self.stack: list[Element] = [self.root]
        self.events: list[HeadingEvent] = []

    def handle_starttag(self, tag: str, attrs_in: list[tuple[str, str | None]]) -> None:
        self._open(tag, attrs_in, self_closing=False)

    def handle_startendtag(self, tag: str, attrs_in: list[tuple[str, str | None]]) -> None:
        self._open(tag, attrs_in, self_closing=True)

    def handle_endtag(self, tag: str) -> None:
        t = tag.lower()
        for idx in range(len(self.stack) - 1, 0, -1):
            if self.stack[idx].tag == t:
                del self.stack[idx:]
                return
        # Stray end tag with no open element: ignored.

    def handle_data(self, data: str) -> None:
        if data:
            self.stack[-1].children.append(data)

    def _open(self, tag: str, attrs_in: list[tuple[str, str | None]], *, self_closing: bool) -> None:
        t = tag.lower()
        props: dict[str, Any] = {}
        for name, value in attrs_in:
            props[name.lower()] = True if value is None else value
        level = _tag_level(t)
        node = Element(tag=t, props=props, level=level)
        self.stack[-1].children.append(node)
        if level is not None:
            line, _ = self.getpos()
            location = f"{self.source}:{line}" if self.source else f"line {line}"
            ident = props.get("id")
            self.events.append(
                HeadingEvent(level=level, source=location, identifier=str(ident) if ident else None)
            )
        if not self_closing and t not in VOID_TAGS:
            self.stack.append(node)


def parse_html(text: str) -> Element:
    """Build a typed element tree from HTML; heading tags get their level set here."""
    builder = _TreeBuilder()
    builder.feed(text)
    builder.close()
    return builder.root


def extract_html_headings(text: str, source: str | None = None) -> list[HeadingEvent]:
    builder = _TreeBuilder(source)
    builder.feed(text)
    builder.close()
    return builder.events


def _call_name(func: ast.expr) -> str | None:
    if isinstance(func, ast.Name):
        return func.id
    if isinstance(func, ast.Attribute):
        return func.attr
    return None


def _heading_call_level(node: ast.Call) -> int | None:
    name = _call_name(node.func)
    if name in _HEADING_COMPONENTS:
        return _HEADING_COMPONENTS[name]
    if name != "Heading":
        return None
    for kw in node.keywords:
        if kw.arg == "level" and isinstance(kw.value, ast.Constant):
            value = kw.value.value
            if isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= 6:
                return value
            return None
    # Heading() without an explicit literal level uses the default of 2.
    if not any(kw.arg in {"level", "auto_level"} for kw in node.keywords):
        return 2
    return None


def extract_python_headings(text: str, source: str | None = None) -> list[HeadingEvent]:
    tree = ast.parse(text, filename=source or "<string>")
    found: list[tuple[int, int, int, str | None]] = []
    for node in ast.walk(tree):
        if not isinstance(node, ast.Call):
            continue
        level = _heading_call_level(node)
        if level is None:
            continue
        ident = None
        for kw in node.keywords:
            if kw.arg == "id" and isinstance(kw.value, ast.Constant) and isinstance(kw.value.value, str):
                ident = kw.value.value
        found.append((node.lineno, node.col_offset, level, ident))
    found.sort(key=lambda item: (item[0], item[1]))
    return [
        HeadingEvent(level=level, source=f"{source}:{line}" if source else f"line {line}", identifier=ident)
        for line, _, level, ident in found
    ]


def extract_jsx_headings(text: str, source: str | None = None) -> list[HeadingEvent]:
    events: list[HeadingEvent] = []
    for m in _JSX_HEADING_RE.finditer(text):
        line = text.count("\n", 0, m.start()) + 1
        events.append(
            HeadingEvent(level=int(m.group(1)), source=f"{source}:{line}" if source else f"line {line}")
        )
    return events


EXTRACTORS: dict[str, Callable[[str, str | None], list[HeadingEvent]]] = {}
EXTRACTORS.update({ext: extract_html_headings for ext in HTML_EXTENSIONS})
EXTRACTORS.update({ext: extract_python_headings for ext in PYTHON_EXTENSIONS})
EXTRACTORS.update({ext: extract_jsx_headings for ext in JSX_EXTENSIONS})


@dataclass
class FileAudit:
    path: str
    events: list[HeadingEvent] = field(default_factory=list)
    violations: list[ViolationReport] = field(default_factory=list)
    error: str | None = None

    @property
    def h1_count(self) -> int:
        return sum(1 for event in self.events if event.is_top_level)

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "headings": [
                {"level": e.level, "source": e.source, "id": e.identifier} for e in self.events
            ],
            "violations": [v.to_dict() for v in self.violations],
            "error": self.error,
        }


def audit_file(path: str | Path) -> FileAudit:
    p = Path(path)
    result = FileAudit(path=str(p))
    extractor = EXTRACTORS.get(p.suffix.lower())
    if extractor is None:
        result.error = f"unsupported file type {p.suffix or '(none)'}"
        return result
    try:
        text = p.read_text(encoding="utf-8")
        result.events = extractor(text, str(p))
    except (OSError, UnicodeDecodeError, SyntaxError) as exc:
        result.error = f"{type(exc).__name__}: {exc}"
        return result
    result.violations = audit_events(result.events)
    return result


def iter_source_files(
    paths: Iterable[str | Path],
    *,
    extensions: Iterable[str],
    exclude: Iterable[str] = (),
) -> list[Path]:
    exts = {e.lower() for e in extensions}
    skip = set(exclude)
    out: list[Path] = []

    def scan(directory: Path) -> None:
        for entry in sorted(directory.iterdir()):
            if entry.name in skip:
                continue
            if entry.is_dir():
                if not entry.name.startswith("."):
                    scan(entry)
            elif entry.suffix.lower() in exts:
                out.append(entry)

    for raw in paths:
        p = Path(raw)
        if p.is_dir():
            scan(p)
        elif p.is_file():
            out.append(p)
        else:
            raise FileNotFoundError(f"audit path not found: {p}")
    return out


def audit_paths(
    paths: Iterable[str | Path],
    *,
    extensions: Iterable[str],
    exclude: Iterable[str] = (),
) -> dict[str, Any]:
    files = [audit_file(p) for p in iter_source_files(paths, extensions=extensions, exclude=exclude)]
    violations = [v for f in files for v in f.violations]
    summary = {
        "total_files": len(files),
        "files_with_headings": sum(1 for f in files if f.events),
        "total_headings": sum(len(f.events) for f in files),
        "h1_count": sum(f.h1_count for f in files),
        "violations_found": len(violations),
        "multiple_h1_files": [
            f.path for f in files if any(v.kind == DUPLICATE_TOP_LEVEL for v in f.violations)
        ],
        "error_files": [f.path for f in files if f.error],
    }
    return {
        "ok": not violations,
        "summary": summary,
        "files": [f.to_dict() for f in files],
        "violations": [v.to_dict() for v in violations],
    }
