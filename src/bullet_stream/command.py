# topmark:header:start
#
#   project      : bullet-stream
#   file         : command.py
#   file_relpath : src/bullet_stream/command.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Run subprocesses for the streamed and timed command steps.

A command that fails (non-zero exit status, or an executable that cannot be
started) is a normal outcome, returned as a
[`CommandError`][bullet_stream.command.CommandError] value. Callers decide
whether to render it, for example with [`Print.error`][bullet_stream.Print.error].
"""

from __future__ import annotations

import shlex
import subprocess
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import IO, TYPE_CHECKING, Union

from bullet_stream.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from pathlib import Path

    from bullet_stream.config.logging import BulletStreamLogger
    from bullet_stream.sinks.api import ByteSink

logger: BulletStreamLogger = get_logger(__name__)

_READ_SIZE = 8192


@dataclass(frozen=True)
class CommandOutput:
    """Captured result of a command that ran to completion.

    Attributes:
        name (str): Shell-quoted command line, for display.
        returncode (int): Exit status.
        stdout (bytes): Everything the command wrote to standard output.
        stderr (bytes): Everything the command wrote to standard error.
    """

    name: str
    returncode: int
    stdout: bytes = b""
    stderr: bytes = b""

    @property
    def success(self) -> bool:
        """True when the command exited with status 0."""
        return self.returncode == 0


@dataclass(frozen=True)
class CommandError:
    """A command that could not be started or exited unsuccessfully.

    Attributes:
        name (str): Shell-quoted command line, for display.
        reason (str): Human-readable description of the failure.
        output (CommandOutput | None): Captured output when the command did run.
    """

    name: str
    reason: str
    output: CommandOutput | None = None

    def __str__(self) -> str:
        return f"Command `{self.name}` failed: {self.reason}"


CommandOutcome = Union[CommandOutput, CommandError]


def command_name(args: Sequence[str]) -> str:
    """Return the display name of a command line."""
    return shlex.join(args)


def _outcome(name: str, returncode: int, stdout: bytes, stderr: bytes) -> CommandOutcome:
    output = CommandOutput(name=name, returncode=returncode, stdout=stdout, stderr=stderr)
    if output.success:
        return output
    return CommandError(name=name, reason=f"exit status {returncode}", output=output)


def _pump(source: IO[bytes], sink: ByteSink) -> bytes:
    captured = bytearray()
    with source:
        while chunk := source.read1(_READ_SIZE):  # type: ignore[attr-defined]
            captured += chunk
            sink.write(chunk)
    return bytes(captured)


def run_streamed(
    args: Sequence[str],
    stdout_sink: ByteSink,
    stderr_sink: ByteSink,
    *,
    cwd: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> CommandOutcome:
    """Run ``args``, copying its stdout and stderr to the given sinks as they arrive.

    Args:
        args (Sequence[str]): Program and arguments.
        stdout_sink (ByteSink): Receives the command's standard output.
        stderr_sink (ByteSink): Receives the command's standard error.
        cwd (str | Path | None): Working directory for the command.
        env (Mapping[str, str] | None): Environment for the command.

    Returns:
        CommandOutcome: `CommandOutput` on success, `CommandError` otherwise.
    """
    name = command_name(args)
    logger.debug("running (streamed): %s", name)
    try:
        proc = subprocess.Popen(
            list(args),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            cwd=cwd,
            env=None if env is None else dict(env),
        )
    except OSError as exc:
        logger.debug("could not start %s: %s", name, exc)
        return CommandError(name=name, reason=f"could not be started ({exc})")

    assert proc.stdout is not None and proc.stderr is not None
    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="bullet-stream-pump") as pool:
        out_future = pool.submit(_pump, proc.stdout, stdout_sink)
        err_future = pool.submit(_pump, proc.stderr, stderr_sink)
        try:
            stdout = out_future.result()
            stderr = err_future.result()
        except BaseException:
            proc.kill()
            proc.wait()
            raise
    returncode = proc.wait()
    logger.debug("%s exited with status %d", name, returncode)
    return _outcome(name, returncode, stdout, stderr)


def run_quiet(
    args: Sequence[str],
    *,
    cwd: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> CommandOutcome:
    """Run ``args`` to completion, capturing its output without displaying it."""
    name = command_name(args)
    logger.debug("running (quiet): %s", name)
    try:
        completed = subprocess.run(
            list(args),
            capture_output=True,
            check=False,
            cwd=cwd,
            env=None if env is None else dict(env),
        )
    except OSError as exc:
        logger.debug("could not start %s: %s", name, exc)
        return CommandError(name=name, reason=f"could not be started ({exc})")
    logger.debug("%s exited with status %d", name, completed.returncode)
    return _outcome(name, completed.returncode, completed.stdout, completed.stderr)
