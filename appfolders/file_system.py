"""Application data directory with a background JSON log, rotation and backups."""

from __future__ import annotations

import json
import logging
import os
import shutil
import threading
import zipfile
from collections import deque
from datetime import datetime
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)

BACKUP_INTERVAL = 30.0
MONITOR_INTERVAL = 1.0


class LogLevel(Enum):
    """Severity of a log entry."""

    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


def to_json_log(timestamp: str, level: str, message: str) -> str:
    """Return one compact JSON log line."""
    return json.dumps(
        {"timestamp": timestamp, "level": level, "message": message},
        separators=(",", ":"),
    )


def _current_timestamp() -> str:
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def _current_date() -> str:
    return datetime.now().strftime("%Y%m%d")


class FileSystem:
    """Manages ``<app_name>_data`` with a dated log file and a backup folder.

    Log messages are queued by :meth:`log` and written by a monitor thread
    (or by :meth:`flush`). The monitor also reports changed files and
    rotates the log when the date changes or it grows too large.
    """

    def __init__(
        self,
        app_name: str,
        max_log_size: int,
        log_file_base_name: str = "log",
        base_dir: str | os.PathLike[str] | None = None,
    ) -> None:
        self.app_name = app_name
        self.max_log_size = max_log_size
        self.base_log_file_name = log_file_base_name
        root = Path(base_dir) if base_dir is not None else Path.cwd()
        self._app_data_dir = root / f"{app_name}_data"
        self.backup_dir = self._app_data_dir / "backup"
        self.active_log_file_name = self._log_name_for_today()
        self.log_file_path = self._app_data_dir / self.active_log_file_name

        self._cond = threading.Condition(threading.RLock())
        self._queue: deque[str] = deque()
        self._file_times: dict[str, int] = {}
        self._monitoring = False
        self._monitor_thread: threading.Thread | None = None
        self._backup_stop = threading.Event()
        self._backup_thread: threading.Thread | None = None

    def __enter__(self) -> FileSystem:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    @property
    def app_data_path(self) -> Path:
        """The directory holding the application's data."""
        return self._app_data_dir

    @property
    def is_monitoring(self) -> bool:
        return self._monitoring

    @property
    def is_backing_up(self) -> bool:
        return self._backup_thread is not None

    def _log_name_for_today(self) -> str:
        return f"{self.base_log_file_name}_{_current_date()}.txt"

    def initialize(self) -> None:
        """Create the data and backup directories and the active log file."""
        self._app_data_dir.mkdir(parents=True, exist_ok=True)
        self.backup_dir.mkdir(parents=True, exist_ok=True)
        if not self.log_file_path.exists():
            self.log_file_path.touch()

    def create_file(self, filename: str, content: str) -> Path:
        """Write ``content`` to ``filename`` inside the data directory."""
        path = self._app_data_dir / filename
        path.write_text(content, encoding="utf-8")
        return path

    def read_file(self, filename: str) -> str:
        """Return the text of ``filename`` inside the data directory."""
        return (self._app_data_dir / filename).read_text(encoding="utf-8")

    def backup_files(self) -> list[Path]:
        """Copy every regular file except the active log into the backup folder."""
        copied = []
        with self._cond:
            log_path = self.log_file_path
        for entry in self._app_data_dir.iterdir():
            if entry.is_file() and entry != log_path:
                target = self.backup_dir / entry.name
                shutil.copyfile(entry, target)
                copied.append(target)
        return copied

    def start_monitoring(self) -> None:
        """Start the thread that writes queued log lines and watches files."""
        with self._cond:
            if self._monitoring:
                return
            self._monitoring = True
            self._monitor_thread = threading.Thread(
                target=self._monitor_directory, name="appfolders-monitor", daemon=True
            )
            self._monitor_thread.start()

    def stop_monitoring(self) -> None:
        """Stop the monitor thread and wait for it to finish."""
        with self._cond:
            if not self._monitoring:
                return
            self._monitoring = False
            self._cond.notify_all()
            thread = self._monitor_thread
            self._monitor_thread = None
        if thread is not None:
            thread.join()

    def start_async_backup(self) -> None:
        """Back up files and compress old logs every 30 seconds in a thread."""
        if self._backup_thread is not None:
            return
        self._backup_stop.clear()
        self._backup_thread = threading.Thread(
            target=self._backup_loop, name="appfolders-backup", daemon=True
        )
        self._backup_thread.start()

    def stop_async_backup(self) -> None:
        """Stop the backup thread and wait for it to finish."""
        thread = self._backup_thread
        if thread is None:
            return
        self._backup_stop.set()
        thread.join()
        self._backup_thread = None

    def _backup_loop(self) -> None:
        while not self._backup_stop.is_set():
            try:
                self.backup_files()
                self.compress_old_logs()
            except OSError:
                logger.exception("Backup failed")
            self._backup_stop.wait(BACKUP_INTERVAL)

    def log(self, message: str, level: LogLevel = LogLevel.INFO) -> None:
        """Queue a log line; it is written by the monitor or by :meth:`flush`."""
        line = to_json_log(_current_timestamp(), level.value, message)
        with self._cond:
            self._queue.append(line)
            self._cond.notify_all()

    def flush(self) -> None:
        """Write all queued log lines to the active log file now."""
        with self._cond:
            self._process_log_queue()

    def _process_log_queue(self) -> None:
        if not self._queue:
            return
        with self.log_file_path.open("a", encoding="utf-8") as log_file:
            while self._queue:
                line = self._queue[0]
                log_file.write(line + "\n")
                logger.debug(line)
                self._queue.popleft()

    def _monitor_directory(self) -> None:
        with self._cond:
            while self._monitoring:
                self._cond.wait_for(
                    lambda: bool(self._queue) or not self._monitoring,
                    timeout=MONITOR_INTERVAL,
                )
                if not self._monitoring:
                    break
                try:
                    self._process_log_queue()
                    self._watch_files_for_changes()
                    if self.needs_log_rotation():
                        self.rotate_log_file()
                except OSError:
                    logger.exception("Monitoring step failed")

    def _watch_files_for_changes(self) -> None:
        try:
            entries = list(self._app_data_dir.iterdir())
        except OSError:
            return
        for entry in entries:
            try:
                if not entry.is_file():
                    continue
                mtime = entry.stat().st_mtime_ns
            except OSError:
                continue
            key = str(entry)
            previous = self._file_times.get(key)
            self._file_times[key] = mtime
            if previous is not None and previous != mtime:
                logger.info("File changed: %s", entry.name)

    def needs_log_rotation(self) -> bool:
        """Whether the date changed or the active log reached the size limit."""
        with self._cond:
            if self.active_log_file_name != self._log_name_for_today():
                return True
            try:
                return self.log_file_path.stat().st_size >= self.max_log_size
            except OSError:
                return False

    def rotate_log_file(self) -> None:
        """Switch to today's log, or move a full log aside and start a new one."""
        with self._cond:
            today_name = self._log_name_for_today()
            if self.active_log_file_name != today_name:
                self.active_log_file_name = today_name
                self.log_file_path = self._app_data_dir / today_name
            else:
                rotated = (
                    f"{self.base_log_file_name}_{_current_date()}_{_current_timestamp()}.txt"
                )
                os.replace(self.log_file_path, self._app_data_dir / rotated)
            self.log_file_path.write_text("", encoding="utf-8")

    def compress_old_logs(self) -> list[Path]:
        """Zip every ``.txt`` file other than the active log and remove it."""
        archives = []
        with self._cond:
            active = self.active_log_file_name
            for entry in list(self._app_data_dir.iterdir()):
                if not entry.is_file() or entry.suffix != ".txt" or entry.name == active:
                    continue
                archive = self._app_data_dir / f"{entry.stem}.zip"
                with zipfile.ZipFile(archive, "w", zipfile.ZIP_DEFLATED) as zf:
                    zf.write(entry, arcname=entry.name)
                entry.unlink()
                archives.append(archive)
        return archives

    def close(self) -> None:
        """Stop both threads and write any log lines still queued."""
        self.stop_monitoring()
        self.stop_async_backup()
        try:
            self.flush()
        except OSError:
            logger.exception("Could not write pending log lines")