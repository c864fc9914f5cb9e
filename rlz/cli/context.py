from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from rlz.output.console import ConsoleProtocol, RichConsole

WORKSPACE_ENV = "RLZ_WORKSPACE"


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    console: ConsoleProtocol


def workspace_root() -> Path:
    """Workspace given by --workspace (via the environment), else the current directory."""
    env = os.environ.get(WORKSPACE_ENV)
    if env:
        return Path(env).expanduser().resolve()
    return Path.cwd().resolve()


def build_context() -> CLIContext:
    return CLIContext(root=workspace_root(), console=RichConsole())
