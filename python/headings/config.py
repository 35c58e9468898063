# SPDX-License-Identifier: AGPL-3.0-only
import copy
import os
from pathlib import Path
from typing import Any, Dict, List, Optional
try:
    import tomllib
except ImportError:
    import tomli as tomllib

CONFIG_FILENAME = "headings.toml"

ENV_KEY = "HEADINGS_ENV"
DIAGNOSTICS_ENV_KEY = "HEADINGS_DIAGNOSTICS"
DEVELOPMENT_ENVS = {"dev", "development"}
DIAGNOSTICS_MODES = {None, "warn"}

# Default configuration structure
DEFAULT_CONFIG = {
    "audit": {
        "paths": ["."],
        "extensions": [".html", ".htm", ".py", ".jsx", ".tsx"],
        "exclude": ["node_modules", "__pycache__", "dist", "build"],
    },
    "diagnostics": {
        # "mode": "warn"
    },
}


def normalize_mode(mode: Any) -> Optional[str]:
    if mode is None:
        return None
    text = str(mode).strip().lower()
    if text in {"", "none", "off", "silent"}:
        return None
    if text not in DIAGNOSTICS_MODES:
        raise ValueError(f"Unsupported diagnostics mode {mode!r}. Expected None or 'warn'.")
    return text


def resolve_diagnostics_mode(mode: Any = None, *, config_mode: Any = None) -> Optional[str]:
    """Pick the diagnostics mode.

    Precedence: explicit value, HEADINGS_DIAGNOSTICS, the ``[diagnostics] mode``
    key of headings.toml, then HEADINGS_ENV.
    """
    if mode is not None:
        return normalize_mode(mode)
    explicit = os.environ.get(DIAGNOSTICS_ENV_KEY)
    if explicit is not None:
        return normalize_mode(explicit)
    if config_mode is not None:
        return normalize_mode(config_mode)
    env = os.environ.get(ENV_KEY, "").strip().lower()
    return "warn" if env in DEVELOPMENT_ENVS else None


class Config:
    def __init__(self, data: Dict[str, Any], path: Path):
        self.data = data
        self.path = path
        self.root = path.parent

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Config":
        """Load configuration from headings.toml."""
        if path is None:
            path = Path.cwd() / CONFIG_FILENAME
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"No {CONFIG_FILENAME} found at {path}.")

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Failed to parse {path}: {e}")

        config = cls(data, path)
        normalize_mode(config.diagnostics.get("mode"))
        return config

    @classmethod
    def discover(cls, start: Optional[Path] = None) -> "Config":
        """Load headings.toml from the working directory, or fall back to defaults."""
        base = Path(start) if start is not None else Path.cwd()
        candidate = base / CONFIG_FILENAME
        if candidate.exists():
            return cls.load(candidate)
        return cls(copy.deepcopy(DEFAULT_CONFIG), candidate)

    @property
    def audit(self) -> Dict[str, Any]:
        return self.data.get("audit", {})

    @property
    def diagnostics(self) -> Dict[str, Any]:
        return self.data.get("diagnostics", {})

    def resolve_path(self, relative_path: str) -> Path:
        return self.root / relative_path

    # Helpers for common fields
    def get_paths(self) -> List[Path]:
        paths = self.audit.get("paths", DEFAULT_CONFIG["audit"]["paths"])
        if isinstance(paths, str):
            paths = [paths]
        return [self.resolve_path(p) for p in paths]

    def get_extensions(self) -> List[str]:
        exts = self.audit.get("extensions", DEFAULT_CONFIG["audit"]["extensions"])
        if isinstance(exts, str):
            exts = [exts]
        return [e if e.startswith(".") else f".{e}" for e in (str(x).strip().lower() for x in exts) if e]

    def get_exclude(self) -> List[str]:
        exclude = self.audit.get("exclude", DEFAULT_CONFIG["audit"]["exclude"])
        if isinstance(exclude, str):
            exclude = [exclude]
        return [str(x) for x in exclude]

    def get_diagnostics_mode(self) -> Optional[str]:
        return resolve_diagnostics_mode(config_mode=self.diagnostics.get("mode"))
