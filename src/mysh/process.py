"""Spawning external processes for the shell."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from mysh.exceptions import CommandNotFoundError, SpawnError

logger = logging.getLogger(__name__)


def _spawn_error(name: str, error: OSError) -> SpawnError:
    if isinstance(error, (FileNotFoundError, PermissionError)):
        return CommandNotFoundError(name)
    return SpawnError(name, error.strerror or str(error))


def _reap(*procs: subprocess.Popen[bytes]) -> None:
    """Wait for children that received the same Ctrl-C as the shell."""
    for proc in procs:
        proc.wait()


class ProcessLauncher:
    """Runs external commands synchronously, inheriting the shell's stdio."""

    def run(self, argv: list[str], cwd: Path | None = None) -> int:
        """Run ``argv`` and wait for it. Returns the exit status.

        Raises:
            CommandNotFoundError: If the executable cannot be located.
            SpawnError: If the process cannot be started for another reason.
        """
        try:
            proc = subprocess.Popen(argv, cwd=cwd)
        except OSError as e:
            raise _spawn_error(argv[0], e) from e
        try:
            returncode = proc.wait()
        except KeyboardInterrupt:
            _reap(proc)
            raise
        logger.debug("%s exited with status %d", argv[0], returncode)
        return returncode

    def pipe(self, producer: list[str], consumer: list[str], cwd: Path | None = None) -> int:
        """Feed the stdout of ``producer`` into the stdin of ``consumer``.

        The consumer writes to the shell's stdout. Waits for the consumer and
        reaps the producer. Returns the consumer's exit status.

        Raises:
            CommandNotFoundError: If either executable cannot be located.
            SpawnError: If either process cannot be started for another reason.
        """
        try:
            source = subprocess.Popen(producer, stdout=subprocess.PIPE, cwd=cwd)
        except OSError as e:
            raise _spawn_error(producer[0], e) from e
        assert source.stdout is not None
        try:
            sink = subprocess.Popen(consumer, stdin=source.stdout, cwd=cwd)
        except OSError as e:
            source.stdout.close()
            source.kill()
            source.wait()
            raise _spawn_error(consumer[0], e) from e
        # Only the consumer should hold the read end, so the producer gets
        # SIGPIPE if the consumer exits early.
        source.stdout.close()
        try:
            returncode = sink.wait()
        except KeyboardInterrupt:
            _reap(sink, source)
            raise
        source.wait()
        logger.debug("%s | %s exited with status %d", producer[0], consumer[0], returncode)
        return returncode
