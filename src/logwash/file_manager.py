"""Low-level file helpers used to read log input and settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .errors import ErrorCode, LogWashError


class FileManager:
    """Wrapper around text/YAML reads with stable error reporting."""

    def read_text(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError as exc:
            raise LogWashError(
                ErrorCode.INVALID_INPUT,
                f"Log file not found: {path}",
                "Pass an existing file or pipe the log output on stdin.",
            ) from exc
        except PermissionError as exc:
            raise LogWashError(
                ErrorCode.PERMISSION_DENIED,
                f"Permission denied while reading {path}",
                "Check file permissions and try again.",
            ) from exc

    def read_yaml(self, path: Path) -> dict[str, Any]:
        if not path.exists():
            raise LogWashError(
                ErrorCode.INVALID_CONFIG,
                f"Config file not found: {path}",
                "Check --config or LOGWASH_CONFIG.",
            )
        try:
            with path.open("r", encoding="utf-8") as handle:
                loaded = yaml.safe_load(handle)
        except PermissionError as exc:
            raise LogWashError(
                ErrorCode.PERMISSION_DENIED,
                f"Permission denied while reading {path}",
                "Check file permissions and try again.",
            ) from exc
        except yaml.YAMLError as exc:
            raise LogWashError(
                ErrorCode.INVALID_CONFIG,
                f"Config file is not valid YAML: {path}",
                "Fix the YAML syntax and retry.",
                {"error": str(exc)},
            ) from exc
        if loaded is None:
            return {}
        if not isinstance(loaded, dict):
            raise LogWashError(
                ErrorCode.INVALID_CONFIG,
                f"Config file must contain a mapping: {path}",
                "Use top-level keys such as cutoff_length and margin.",
            )
        return loaded
