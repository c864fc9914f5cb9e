from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

ConfigErrorKind = Literal[
    "not_found",
    "io",
    "syntax",
    "unknown_field",
    "invalid_value",
    "missing_field",
    "invalid_timeout",
]


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when the configuration cannot be loaded or is invalid."""

    kind: ConfigErrorKind
    message: str
    path: Path | None = None
    hint: str | None = None

    def pretty(self) -> str:
        prefix = f"{self.path}: " if self.path is not None else ""
        if self.hint:
            return f"{prefix}{self.message} (hint: {self.hint})"
        return f"{prefix}{self.message}"
