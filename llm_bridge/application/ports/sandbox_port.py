"""Sandbox port for running commands in an isolated environment."""

import threading
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class ExecResult:
    stdout: str
    stderr: str


@runtime_checkable
class SandboxPort(Protocol):
    """Port for command execution inside an isolated runtime.

    Implementations raise ExecutionError when the command cannot be run or
    exits unsuccessfully, and ExecutionCancelled when `cancel` is set while
    the command is still running.
    """

    def run(
        self,
        command: Sequence[str],
        env: Mapping[str, str] | None = None,
        workdir: str | None = None,
        cancel: threading.Event | None = None,
    ) -> ExecResult:
        """Run `command` to completion and return its captured streams."""
        ...
