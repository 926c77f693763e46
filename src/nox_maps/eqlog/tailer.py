"""Follow the active game log and stream new lines to a queue.

The game writes one log per character (``eqlog_<character>_<server>.txt``).
Logging in with another character starts writing a different file, so the
tailer periodically re-discovers the most recently modified log and
switches to it, re-reading a small trailing window so that the zone line
written during login is not missed.

Design Decisions:
    - Polling rather than filesystem notifications, for portability
    - One background thread runs both the rotation timer and the read loop
    - The line queue is bounded; a slow consumer blocks the tailer instead
      of losing lines
    - Partial lines (no trailing newline yet) are buffered until complete
"""

from __future__ import annotations

import os
import threading
import time
from pathlib import Path
from queue import Full, Queue
from typing import BinaryIO

from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from nox_maps.core import constants
from nox_maps.core.config import TailerSettings
from nox_maps.core.exceptions import LogDiscoveryError, TailerError
from nox_maps.core.logging import bind_context, clear_context, get_logger
from nox_maps.eqlog.patterns import extract_zone_name
from nox_maps.models.state import LogLine


logger = get_logger(__name__)

_PUT_TIMEOUT = 0.5


def is_log_file_name(name: str) -> bool:
    """True for filenames matching ``eqlog*.txt``."""
    return name.startswith(constants.LOG_FILE_PREFIX) and name.endswith(
        constants.LOG_FILE_SUFFIX
    )


def _modified_time(path: Path) -> float:
    try:
        return path.stat().st_mtime
    except OSError:
        # Deleted between listing and stat
        return float("-inf")


class LogTailer:
    """Stream newly appended lines of the newest game log.

    Attributes:
        eq_dir: Game installation directory.
        settings: Timing and buffer configuration.
        lines: Bounded FIFO queue of LogLine objects for a single consumer.
        initial_zone: Last zone found in the log history by
            ``detect_initial_zone``, if any.
        current_path: Log file currently being followed.

    Example:
        >>> tailer = LogTailer(Path("C:/EverQuest"))
        >>> tailer.start()
        >>> line = tailer.lines.get()
    """

    def __init__(
        self,
        eq_dir: Path | str,
        *,
        settings: TailerSettings | None = None,
        lines: Queue[LogLine] | None = None,
    ) -> None:
        """Initialize a tailer for a game directory.

        Args:
            eq_dir: Game installation directory. Logs are searched here and,
                when none are found, in its ``Logs`` subdirectory.
            settings: Tailer configuration; defaults are used when omitted.
            lines: Queue to publish lines to. A bounded queue sized from
                ``settings.queue_size`` is created when omitted.
        """
        self.eq_dir = Path(eq_dir)
        self.settings = settings or TailerSettings()
        self.lines: Queue[LogLine] = (
            lines if lines is not None else Queue(maxsize=self.settings.queue_size)
        )
        self.initial_zone: str | None = None
        self.current_path: Path | None = None

        self._file: BinaryIO | None = None
        # Bytes of a line whose newline has not been written yet
        self._partial = b""
        self._last_check: float | None = None
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    # -------------------------------------------------------------------------
    # Discovery
    # -------------------------------------------------------------------------

    @staticmethod
    def scan_dir(directory: Path) -> list[Path]:
        """List the game logs directly inside ``directory``.

        A missing or unreadable directory yields an empty list.
        """
        try:
            entries = list(directory.iterdir())
        except OSError:
            return []
        return [path for path in entries if is_log_file_name(path.name) and path.is_file()]

    def find_latest_log(self) -> Path:
        """Find the most recently modified game log.

        Returns:
            Path of the active log.

        Raises:
            LogDiscoveryError: If neither the game directory nor its ``Logs``
                subdirectory contains a log.
        """
        searched = [self.eq_dir]
        logs = self.scan_dir(self.eq_dir)
        if not logs:
            subdir = self.eq_dir / constants.LOG_SUBDIRECTORY
            searched.append(subdir)
            logs = self.scan_dir(subdir)

        if not logs:
            raise LogDiscoveryError(
                "No game log files found",
                searched=[str(path) for path in searched],
            )

        return max(logs, key=lambda path: (_modified_time(path), path.name))

    def detect_initial_zone(self) -> str | None:
        """Find the last zone entered according to the newest log's tail.

        Scans the last ``initial_scan_bytes`` of the newest log. Failures are
        logged and leave ``initial_zone`` unchanged.

        Returns:
            The detected long zone name, or None.
        """
        try:
            path = self.find_latest_log()
        except LogDiscoveryError as exc:
            logger.debug("Initial zone scan skipped", reason=exc.message, **exc.details)
            return None
        except OSError as exc:
            logger.debug("Initial zone scan skipped", reason=str(exc))
            return None

        last_zone: str | None = None
        try:
            with path.open("rb") as handle:
                size = os.fstat(handle.fileno()).st_size
                handle.seek(max(0, size - self.settings.initial_scan_bytes))
                for raw in handle:
                    zone = extract_zone_name(
                        raw.decode(self.settings.encoding, errors="replace").strip()
                    )
                    if zone is not None:
                        last_zone = zone
        except OSError as exc:
            logger.debug("Initial zone scan failed", path=str(path), error=str(exc))
            return None

        if last_zone is not None:
            self.initial_zone = last_zone
            logger.info("Detected initial zone from log", zone=last_zone, path=path.name)
        return last_zone

    # -------------------------------------------------------------------------
    # Rotation
    # -------------------------------------------------------------------------

    @retry(
        retry=retry_if_exception_type(OSError),
        stop=stop_after_attempt(3),
        wait=wait_fixed(0.2),
        reraise=True,
    )
    def _open_log(self, path: Path) -> BinaryIO:
        """Open a log for reading, retrying while the game still holds it."""
        return path.open("rb")

    def check_rotation(self) -> bool:
        """Switch to the newest log if it is not the one being followed.

        The new log is positioned ``switch_seek_back`` bytes before its end.

        Returns:
            True if a different log was opened.
        """
        self._last_check = time.monotonic()
        try:
            latest = self.find_latest_log()
        except LogDiscoveryError as exc:
            logger.debug("No log to follow yet", **exc.details)
            return False

        if latest == self.current_path:
            return False

        try:
            handle = self._open_log(latest)
        except OSError as exc:
            logger.warning("Could not open log", path=str(latest), error=str(exc))
            return False

        try:
            size = os.fstat(handle.fileno()).st_size
            offset = max(0, size - self.settings.switch_seek_back)
            handle.seek(offset)
        except OSError as exc:
            handle.close()
            logger.warning("Could not position log", path=str(latest), error=str(exc))
            return False

        self._close_current()
        self._file = handle
        self._partial = b""
        self.current_path = latest
        logger.info("Following log", path=latest.name, offset=offset, size=size)
        return True

    # -------------------------------------------------------------------------
    # Reading
    # -------------------------------------------------------------------------

    def read_line(self) -> LogLine | None:
        """Read the next complete, non-empty line from the open log.

        Returns:
            The next LogLine, or None if no file is open or no complete
            line is available yet.

        Raises:
            OSError: If the underlying read fails.
        """
        while self._file is not None:
            raw = self._file.readline()
            if not raw:
                return None
            if not raw.endswith(b"\n"):
                self._partial += raw
                return None

            raw, self._partial = self._partial + raw, b""
            text = raw.decode(self.settings.encoding, errors="replace").strip()
            if text:
                return LogLine(text=text, source=self.current_path)
        return None

    def _publish(self, line: LogLine) -> bool:
        """Block until the line is queued; give up only when stopping."""
        while not self._stop.is_set():
            try:
                self.lines.put(line, timeout=_PUT_TIMEOUT)
                return True
            except Full:
                continue
        return False

    def _run(self) -> None:
        settings = self.settings
        bind_context(eq_dir=str(self.eq_dir))
        logger.debug("Tailer loop started")
        try:
            self._follow(settings)
        finally:
            logger.debug("Tailer loop stopped")
            clear_context()

    def _follow(self, settings: TailerSettings) -> None:
        while not self._stop.is_set():
            if (
                self._last_check is None
                or time.monotonic() - self._last_check >= settings.poll_interval
            ):
                try:
                    switched = self.check_rotation()
                except OSError as exc:
                    logger.warning("Log discovery failed", error=str(exc))
                    self._stop.wait(settings.idle_sleep)
                    continue
                if switched and self.current_path is not None:
                    bind_context(log_file=self.current_path.name)

            if self._file is None:
                self._stop.wait(settings.missing_sleep)
                continue

            try:
                line = self.read_line()
            except OSError as exc:
                logger.warning(
                    "Log read failed",
                    path=str(self.current_path),
                    error=str(exc),
                )
                self._stop.wait(settings.idle_sleep)
                continue

            if line is None:
                self._stop.wait(settings.idle_sleep)
                continue

            self._publish(line)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> threading.Thread:
        """Detect the initial zone and start following logs in the background.

        Returns:
            The daemon thread running the tailer loop.

        Raises:
            TailerError: If the tailer is already running.
        """
        if self.is_running:
            raise TailerError("Log tailer is already running")

        self.detect_initial_zone()
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run,
            name="nox-maps-tailer",
            daemon=True,
        )
        self._thread.start()
        return self._thread

    def stop(self, timeout: float | None = 2.0) -> None:
        """Stop the background loop and close the open log."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None
        self._close_current()
        self.current_path = None

    def _close_current(self) -> None:
        if self._file is not None:
            try:
                self._file.close()
            except OSError as exc:
                logger.debug("Closing log failed", path=str(self.current_path), error=str(exc))
            self._file = None


__all__ = [
    "LogTailer",
    "is_log_file_name",
]
