"""Command execution on top of invoke."""

import contextlib
import os
import platform
from pathlib import Path

from invoke import Context, Result
from invoke.exceptions import CommandTimedOut

from mergespace.core.log import logger


class Runner(Context):
    """invoke.Context with a single execute() entry point.

    All git subprocesses go through execute() so that they share
    output capture, timeouts and spew-level logging.
    """

    def kill(self) -> None:
        """Kill the running subprocess.

        invoke sends signal.SIGKILL, which does not exist on Windows;
        os.kill() there accepts the plain number instead.
        """
        if platform.system() == "Windows":
            pid = self.pid if self.using_pty else self.process.pid
            with contextlib.suppress(ProcessLookupError):
                os.kill(pid, 9)
            return

        super().kill()

    def execute(
        self,
        command: str,
        cwd: Path | None = None,
        timeout: int | None = None,
        check: bool = True,
        env: dict[str, str] | None = None,
    ) -> Result:
        """Execute a shell command and capture its output.

        Args:
            command: Command string to execute
            cwd: Working directory for command execution
            timeout: Maximum execution time in seconds
            check: If True, raise on non-zero exit code
            env: Extra environment variables (merged into os.environ)

        Returns:
            invoke.Result with stdout, stderr, exited (return code);
            exited is -1 when the command timed out

        Raises:
            invoke.UnexpectedExit: If check=True and command
                returns non-zero
        """
        kwargs = {
            "hide": True,
            "warn": not check,
            "in_stream": False,
        }
        if timeout:
            kwargs["timeout"] = timeout
        if env:
            kwargs["env"] = env

        logger.spew("Running command", command=command, cwd=str(cwd or ""))

        try:
            if cwd:
                with self.cd(str(cwd)):
                    result = self.run(command, **kwargs)
            else:
                result = self.run(command, **kwargs)
        except CommandTimedOut as e:
            result = e.result
            result.exited = -1

        logger.spew(
            "Command finished",
            command=command,
            exited=result.exited,
            stdout_bytes=len(result.stdout),
            stderr_bytes=len(result.stderr),
        )
        return result
