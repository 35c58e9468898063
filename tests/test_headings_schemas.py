from __future__ import annotations

import json
from pathlib import Path

import jsonschema
import pytest

from headings.cli import main
from headings.schemas import SCHEMA_NAMES, load_schema, validate_payload


def _json_lines(out: str) -> list[dict]:
    return [json.loads(line) for line in out.splitlines() if line.strip()]


def test_bundled_schemas_are_valid_draft_2020_12() -> None:
    for name in SCHEMA_NAMES:
        jsonschema.Draft202012Validator.check_schema(load_schema(name))


def test_cli_payloads_match_their_schema(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    page = tmp_path / "index.html"
    page.write_text("<h1>A</h1><h3>B</h3><h1>C</h1>", encoding="utf-8")

    assert main(["--json", "--validate-schema", "levels", "1", "4"]) == 1
    assert main(["--json", "--validate-schema", "audit", str(tmp_path)]) == 1
    assert main(["--json", "--validate-schema", "html", str(page)]) == 1
    assert main(["--json", "levels", "7"]) == 3

    payloads = _json_lines(capsys.readouterr().out)
    assert [p["schema"] for p in payloads] == [
        "headings.levels.v1",
        "headings.audit.v1",
        "headings.html.v1",
        "headings.error.v1",
    ]
    for payload in payloads:
        validate_payload(payload)


def test_validate_payload_rejects_bad_violation_entry() -> None:
    payload = {
        "schema": "headings.levels.v1",
        "ok": False,
        "levels": [1, 4],
        "violations": [{"code": "SKIPPED_LEVEL", "severity": "warning"}],
    }
    with pytest.raises(jsonschema.ValidationError):
        validate_payload(payload)


def test_validate_payload_requires_known_schema() -> None:
    with pytest.raises(KeyError):
        validate_payload({"ok": True})
    with pytest.raises(KeyError):
        validate_payload({"schema": "headings.nope.v1"})
