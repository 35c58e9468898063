from __future__ import annotations

import sys
from pathlib import Path

import pytest


ROOT = Path(__file__).resolve().parents[1]
PYTHON_SRC = ROOT / "python"

if str(PYTHON_SRC) not in sys.path:
    sys.path.insert(0, str(PYTHON_SRC))
else:
    sys.path.remove(str(PYTHON_SRC))
    sys.path.insert(0, str(PYTHON_SRC))


def _prefer_local_headings_package() -> None:
    loaded = sys.modules.get("headings")
    if loaded is None:
        return
    mod_file = getattr(loaded, "__file__", "") or ""
    if str(PYTHON_SRC / "headings") in mod_file:
        return
    for name in list(sys.modules):
        if name == "headings" or name.startswith("headings."):
            sys.modules.pop(name, None)


_prefer_local_headings_package()


@pytest.fixture(autouse=True)
def _clear_headings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("HEADINGS_ENV", raising=False)
    monkeypatch.delenv("HEADINGS_DIAGNOSTICS", raising=False)
