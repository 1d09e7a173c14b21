"""
Launching Claude Code after a profile switch.

The launcher is a small protocol so the CLI and login workflow can be driven
by a fake in tests without touching a real `claude` binary.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
import logging
import os
import shutil
import subprocess
from typing import Protocol

from claudectx.errors import ExecutableNotFound
from claudectx.settings import DEFAULT_EXECUTABLE

logger = logging.getLogger(__name__)


class Launcher(Protocol):
    def launch(self, args: Sequence[str]) -> int:
        """Run the target program with `args`; return its exit code."""
        ...


class ProcessLauncher:
    """Spawn the executable found on PATH and wait for it to exit."""

    def __init__(
        self,
        executable: str = DEFAULT_EXECUTABLE,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self.executable = executable
        self.env = dict(os.environ if env is None else env)

    def resolve(self) -> str:
        """Absolute path of the executable, or ExecutableNotFound."""
        found = shutil.which(self.executable, path=self.env.get("PATH"))
        if found is None:
            raise ExecutableNotFound(self.executable)
        return found

    def launch(self, args: Sequence[str]) -> int:
        path = self.resolve()
        argv = [path, *args]
        logger.debug("Launching %s", argv)
        try:
            result = subprocess.run(argv, check=False, env=self.env)
        except FileNotFoundError as e:
            # Removed between which() and exec
            raise ExecutableNotFound(self.executable) from e
        logger.debug("%s exited with %s", self.executable, result.returncode)
        return _exit_code(result.returncode)


def _exit_code(returncode: int) -> int:
    """Map a Popen return code to a shell-style exit status (signal N -> 128+N)."""
    if returncode < 0:
        return 128 - returncode
    return returncode
