# SPDX-License-Identifier: AGPL-3.0-only
"""JSON schemas for the machine-readable CLI payloads.

Every ``--json`` payload carries a ``schema`` key naming one of the files in
this directory. :func:`validate_payload` checks a payload against the schema it
names; violation entries are shared through ``urn:headings:violation.v1``.
"""
from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

SCHEMA_DIR = Path(__file__).resolve().parent
SCHEMA_NAMES = (
    "headings.audit.v1",
    "headings.levels.v1",
    "headings.html.v1",
    "headings.error.v1",
)


def _j(path: Path) -> dict[str, Any]:
    return json.loads(path.read_text(encoding="utf-8"))


def load_schema(name: str) -> dict[str, Any]:
    path = SCHEMA_DIR / f"{name}.schema.json"
    if not path.exists():
        raise KeyError(f"unknown payload schema: {name}")
    return _j(path)


@lru_cache(maxsize=1)
def _registry():
    from referencing import Registry, Resource

    resources = []
    for path in sorted(SCHEMA_DIR.glob("*.schema.json")):
        contents = _j(path)
        resources.append((contents["$id"], Resource.from_contents(contents)))
    return Registry().with_resources(resources)


def validate_payload(payload: dict[str, Any]) -> None:
    """Raise ``jsonschema.ValidationError`` if ``payload`` breaks its schema."""
    import jsonschema

    name = payload.get("schema")
    if not isinstance(name, str):
        raise KeyError("payload has no 'schema' key")
    jsonschema.Draft202012Validator(load_schema(name), registry=_registry()).validate(payload)
