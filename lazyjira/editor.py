"""External editor launcher for issue descriptions.

Writes the content to a per-issue temp file, runs ``$EDITOR`` on it, and reads
the result back. The caller is expected to have released the terminal first.
Failures raise ``EditorError`` subclasses; the temp file never outlives ``open``.
"""

from __future__ import annotations

import contextlib
import logging
import os
import re
import shlex
import signal
import subprocess
import tempfile
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .errors import (
    ContentReadError,
    EditorExecutionError,
    EditorSpawnError,
    EditorTerminatedError,
    TempFileCreationError,
)

logger = logging.getLogger(__name__)

EDITOR_ENV_VARS: tuple[str, ...] = ("EDITOR", "VISUAL")
DEFAULT_EDITOR = "vi"
TEMP_FILE_PREFIX = "lazyjira"
TEMP_FILE_SUFFIX = ".md"
_UNSAFE_KEY_CHARS_RE = re.compile(r"[^A-Za-z0-9._-]")
# Keyboard signals go to the editor alone while it owns the terminal.
_PARENT_IGNORED_SIGNALS = (signal.SIGINT, signal.SIGQUIT)
_TRANSIENT_OPEN_FLAGS = os.O_WRONLY | os.O_CREAT | os.O_TRUNC | os.O_NOFOLLOW


@dataclass(frozen=True)
class EditOutcome:
    """Content read back from the editor and whether it differs from the input."""

    content: str
    was_modified: bool


def resolve_editor_command(environ: Mapping[str, str] | None = None) -> str:
    """Return ``$EDITOR``, then ``$VISUAL``, then ``vi``.

    Blank values count as unset.
    """
    env = os.environ if environ is None else environ
    for name in EDITOR_ENV_VARS:
        value = env.get(name, "").strip()
        if value:
            return value
    return DEFAULT_EDITOR


def transient_edit_path(issue_key: str, pid: int | None = None, temp_dir: Path | None = None) -> Path:
    """Build ``<tmp>/lazyjira-<issue_key>-<pid>.md`` for one edit session."""
    safe_key = _UNSAFE_KEY_CHARS_RE.sub("_", issue_key) or "issue"
    process_id = os.getpid() if pid is None else pid
    base_dir = Path(tempfile.gettempdir()) if temp_dir is None else temp_dir
    return base_dir / f"{TEMP_FILE_PREFIX}-{safe_key}-{process_id}{TEMP_FILE_SUFFIX}"


def _write_transient_file(path: Path, content: str) -> None:
    """Write ``content`` to ``path`` without following a pre-planted symlink."""
    try:
        fd = os.open(path, _TRANSIENT_OPEN_FLAGS, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(content)
    except OSError as exc:
        _remove_transient_file(path)
        raise TempFileCreationError(exc) from exc


def _read_transient_file(path: Path) -> str:
    try:
        with open(path, encoding="utf-8", newline="") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise ContentReadError(exc) from exc


def _restore_default_signals() -> None:
    for signum in _PARENT_IGNORED_SIGNALS:
        signal.signal(signum, signal.SIG_DFL)


@contextlib.contextmanager
def _parent_signals_ignored():
    """Ignore Ctrl+C and Ctrl+\\ in this process, like ``os.system`` does."""
    previous = {signum: signal.signal(signum, signal.SIG_IGN) for signum in _PARENT_IGNORED_SIGNALS}
    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, signal.SIG_DFL if handler is None else handler)


def _remove_transient_file(path: Path) -> bool:
    """Delete ``path``; a failure is only worth a warning."""
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("Failed to clean up temporary file %s: %s", path, exc)
        return False
    return True


class ExternalEditor:
    """Run a text editor on a temp copy of some content."""

    def __init__(self, command: str | None = None, temp_dir: Path | None = None) -> None:
        self.command = command if command is not None else resolve_editor_command()
        self.temp_dir = temp_dir

    def argv(self) -> list[str]:
        """Split the editor command the way a shell would."""
        try:
            parts = shlex.split(self.command)
        except ValueError as exc:
            raise EditorSpawnError(self.command, exc) from exc
        if not parts:
            raise EditorSpawnError(self.command, "editor command is empty")
        return parts

    def open(self, issue_key: str, content: str) -> EditOutcome:
        """Edit ``content`` for ``issue_key`` and return what the user saved.

        Blocks until the editor exits. Raises ``TempFileCreationError``,
        ``EditorSpawnError``, ``EditorExecutionError`` (or its
        ``EditorTerminatedError`` subclass) or ``ContentReadError``.
        """
        argv = self.argv()
        path = transient_edit_path(issue_key, temp_dir=self.temp_dir)
        _write_transient_file(path, content)
        logger.debug("Wrote transient edit file %s for %s", path, issue_key)
        try:
            self._run(argv, path)
            edited = _read_transient_file(path)
        finally:
            if _remove_transient_file(path):
                logger.debug("Removed transient edit file %s", path)

        outcome = EditOutcome(content=edited, was_modified=edited != content)
        logger.debug("Editor finished for %s (modified=%s)", issue_key, outcome.was_modified)
        return outcome

    def _run(self, argv: list[str], path: Path) -> None:
        logger.debug("Launching editor %r on %s", argv, path)
        try:
            with _parent_signals_ignored():
                completed = subprocess.run(
                    [*argv, str(path)],
                    check=False,
                    preexec_fn=_restore_default_signals,
                )
        except OSError as exc:
            raise EditorSpawnError(self.command, exc) from exc

        returncode = completed.returncode
        if returncode < 0:
            raise EditorTerminatedError(-returncode)
        if returncode != 0:
            raise EditorExecutionError(returncode)
