"""Run provider listing commands and decode their JSON output."""
from __future__ import annotations

import json
import logging
import subprocess
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from ..core.errors import FetchError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CommandResult:
    """Captured output of a listing command."""

    stdout: str
    stderr: str = ""
    returncode: int = 0

    @property
    def success(self) -> bool:
        return self.returncode == 0


CommandRunner = Callable[[Sequence[str], float], CommandResult]


def run_command(argv: Sequence[str], timeout: float) -> CommandResult:
    """Execute ``argv`` and capture its output.

    A missing executable or a timeout is reported as :class:`FetchError`;
    a non-zero exit status is returned to the caller to interpret.
    """
    if not argv:
        raise FetchError("No listing command configured")

    command = " ".join(argv)
    logger.debug("Running listing command: %s", command)

    try:
        result = subprocess.run(
            list(argv),
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError:
        logger.error("%s not found - ensure it is installed and on PATH", argv[0])
        raise FetchError(f"{argv[0]} command not found", command=argv) from None
    except subprocess.TimeoutExpired:
        logger.error("%s timed out after %.1f seconds", command, timeout)
        raise FetchError(
            f"{command} timed out after {timeout:g} seconds", command=argv
        ) from None

    logger.debug(
        "%s exit=%s stdout_len=%d stderr_len=%d",
        command,
        result.returncode,
        len(result.stdout or ""),
        len(result.stderr or ""),
    )
    return CommandResult(
        stdout=result.stdout or "",
        stderr=result.stderr or "",
        returncode=result.returncode,
    )


def ensure_success(result: CommandResult, argv: Sequence[str]) -> None:
    """Raise :class:`FetchError` when a listing command failed."""

    if result.success:
        return

    preview = result.stderr.strip() or result.stdout.strip()
    raise FetchError(
        f"{' '.join(argv)} failed (exit={result.returncode}): {preview}",
        command=argv,
        detail=preview or None,
    )


def decode_json_output(stdout: str, argv: Sequence[str]) -> Any:
    """Parse command output as JSON; empty output decodes to ``None``."""

    raw_output = stdout.strip().lstrip("\ufeff")
    if not raw_output:
        return None

    try:
        return json.loads(raw_output)
    except json.JSONDecodeError as exc:
        logger.debug("Raw output from %s: %s", " ".join(argv), stdout)
        raise FetchError(
            f"Unable to parse output of {' '.join(argv)}: {exc}",
            command=argv,
            detail=str(exc),
        ) from exc
