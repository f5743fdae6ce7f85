"""A JSON file store that records file metadata and logs every operation."""

from __future__ import annotations

import contextlib
import errno
import json
import os
import threading
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Mapping

_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def _now() -> str:
    return datetime.now().strftime(_TIME_FORMAT)


def _q(text: str) -> str:
    return json.dumps(text)


def _flat_json(data: Mapping[str, str]) -> str:
    lines = [f"  {_q(str(k))}: {_q(str(data[k]))}" for k in sorted(data)]
    body = ",\n".join(lines)
    return "{\n" + (body + "\n" if body else "") + "}\n"


def _missing(path: str) -> FileNotFoundError:
    return FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)


@dataclass
class FileInfo:
    """Metadata kept for a file the store has written."""

    path: str
    created_time: str
    modified_time: str
    size: int
    content_type: str

    def to_json(self) -> str:
        return (
            "{\n"
            f'  "path": {_q(self.path)},\n'
            f'  "created_time": {_q(self.created_time)},\n'
            f'  "modified_time": {_q(self.modified_time)},\n'
            f'  "size": {self.size},\n'
            f'  "content_type": {_q(self.content_type)}\n'
            "}"
        )


@dataclass
class MonitoringStats:
    """Counters of the operations the store has performed."""

    files_created: int = 0
    files_modified: int = 0
    files_deleted: int = 0
    files_read: int = 0
    last_operation: str = "initialized"
    last_operation_time: str = field(default_factory=_now)

    def to_json(self) -> str:
        return (
            "{\n"
            f'  "files_created": {self.files_created},\n'
            f'  "files_modified": {self.files_modified},\n'
            f'  "files_deleted": {self.files_deleted},\n'
            f'  "files_read": {self.files_read},\n'
            f'  "last_operation": {_q(self.last_operation)},\n'
            f'  "last_operation_time": {_q(self.last_operation_time)}\n'
            "}"
        )


class MonitoredFileStore:
    """Creates, reads, updates and deletes JSON files while logging each step.

    When monitoring is enabled, the log file holds a JSON array of entries,
    which is closed off by :meth:`close`.
    """

    def __init__(
        self,
        enable_monitoring: bool = True,
        log_path: str | os.PathLike[str] = "file_system_monitor.json",
    ) -> None:
        self._registry: dict[str, FileInfo] = {}
        self._stats = MonitoringStats()
        self._lock = threading.RLock()
        self._closed = False
        self.monitoring_enabled = enable_monitoring
        self.log_path = Path(log_path)
        if enable_monitoring:
            with contextlib.suppress(OSError):
                self.log_path.write_text("[\n", encoding="utf-8")
        self._log_operation("File_System initialized")

    def __enter__(self) -> MonitoredFileStore:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Write the closing log entry and terminate the JSON array."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            if self.monitoring_enabled:
                self._append_log_entry("File_System destroyed", "", _now(), "}\n]\n")

    def _append_log_entry(self, operation: str, file_path: str, timestamp: str, tail: str) -> None:
        entry = (
            "{\n"
            f'  "timestamp": {_q(timestamp)},\n'
            f'  "operation": {_q(operation)},\n'
            f'  "file_path": {_q(file_path)},\n'
            f'  "thread_id": {_q(str(threading.get_ident()))}\n'
            + tail
        )
        with contextlib.suppress(OSError):
            with self.log_path.open("a", encoding="utf-8") as log_file:
                log_file.write(entry)

    def _log_operation(self, operation: str, file_path: str = "") -> None:
        with self._lock:
            self._stats.last_operation = operation
            self._stats.last_operation_time = _now()
            if self.monitoring_enabled:
                self._append_log_entry(
                    operation, file_path, self._stats.last_operation_time, "},\n"
                )

    def _update_file_info(self, file_path: str, content_type: str = "json") -> None:
        stamp = _now()
        info = FileInfo(file_path, stamp, stamp, 0, content_type)
        if os.path.exists(file_path):
            stat = os.stat(file_path)
            info.size = stat.st_size
            info.modified_time = datetime.fromtimestamp(stat.st_mtime).strftime(_TIME_FORMAT)
        self._registry[file_path] = info

    def _write(self, file_path: str, content: str, failure: str) -> None:
        try:
            Path(file_path).write_text(content, encoding="utf-8")
        except OSError:
            self._log_operation(failure, file_path)
            raise

    def create_json_file(self, file_path: str | os.PathLike[str], data: Mapping[str, str]) -> None:
        """Write a flat JSON object of string pairs, keys in sorted order."""
        path = os.fspath(file_path)
        with self._lock:
            self._write(path, _flat_json(data), "Failed to create file")
            self._update_file_info(path, "json")
            self._stats.files_created += 1
            self._log_operation("Created JSON file", path)

    def create_json_file_raw(self, file_path: str | os.PathLike[str], json_content: str) -> None:
        """Write ``json_content`` to the file as it is."""
        path = os.fspath(file_path)
        with self._lock:
            self._write(path, json_content, "Failed to create raw JSON file")
            self._update_file_info(path, "json")
            self._stats.files_created += 1
            self._log_operation("Created raw JSON file", path)

    def read_json_file(self, file_path: str | os.PathLike[str]) -> str:
        """Return the text of a file."""
        path = os.fspath(file_path)
        with self._lock:
            try:
                text = Path(path).read_text(encoding="utf-8")
            except OSError:
                self._log_operation("Failed to read file", path)
                raise
            self._stats.files_read += 1
            self._log_operation("Read JSON file", path)
            return text

    def update_json_file(self, file_path: str | os.PathLike[str], new_data: Mapping[str, str]) -> None:
        """Replace an existing file with a flat JSON object of string pairs."""
        path = os.fspath(file_path)
        with self._lock:
            if not os.path.exists(path):
                self._log_operation("File does not exist for update", path)
                raise _missing(path)
            self._write(path, _flat_json(new_data), "Failed to open file for update")
            self._update_file_info(path, "json")
            self._stats.files_modified += 1
            self._log_operation("Updated JSON file", path)

    def delete_file(self, file_path: str | os.PathLike[str]) -> None:
        """Remove a file and forget its metadata."""
        path = os.fspath(file_path)
        with self._lock:
            if not os.path.exists(path):
                self._log_operation("File does not exist for deletion", path)
                raise _missing(path)
            try:
                os.remove(path)
            except OSError as exc:
                self._log_operation(f"Error deleting file: {exc}", path)
                raise
            self._registry.pop(path, None)
            self._stats.files_deleted += 1
            self._log_operation("Deleted file", path)

    def file_info_json(self, file_path: str | os.PathLike[str]) -> str:
        """Return the recorded metadata of a file, or ``{}`` if unknown."""
        with self._lock:
            info = self._registry.get(os.fspath(file_path))
            return info.to_json() if info else "{}"

    def monitoring_stats_json(self) -> str:
        """Return the operation counters as JSON."""
        with self._lock:
            return self._stats.to_json()

    def all_files_json(self) -> str:
        """Return the metadata of every known file, ordered by path."""
        with self._lock:
            entries = [f"    {self._registry[p].to_json()}" for p in sorted(self._registry)]
            body = ",\n".join(entries)
            return (
                '{\n  "files": [\n'
                + (body + "\n" if body else "")
                + "  ],\n"
                + f'  "total_files": {len(self._registry)}\n'
                + "}\n"
            )

    def export_monitoring_data(self, export_path: str | os.PathLike[str]) -> None:
        """Write the counters and the file metadata into one JSON document."""
        path = os.fspath(export_path)
        with self._lock:
            document = (
                "{\n"
                f'  "monitoring_statistics": {self.monitoring_stats_json()},\n'
                f'  "registered_files": {self.all_files_json()}\n'
                "}\n"
            )
            try:
                Path(path).write_text(document, encoding="utf-8")
            except OSError as exc:
                self._log_operation(f"Error exporting monitoring data: {exc}", path)
                raise
            self._log_operation("Exported monitoring data", path)

    def set_monitoring(self, enabled: bool) -> None:
        """Turn writing to the log file on or off."""
        with self._lock:
            self.monitoring_enabled = enabled
            self._log_operation("Monitoring enabled" if enabled else "Monitoring disabled")

    def file_exists(self, file_path: str | os.PathLike[str]) -> bool:
        return os.path.exists(file_path)

    def file_size(self, file_path: str | os.PathLike[str]) -> int:
        """Return the size of a file in bytes, or 0 if it does not exist."""
        if os.path.exists(file_path):
            return os.path.getsize(file_path)
        return 0

    def list_directory_json(self, directory_path: str | os.PathLike[str]) -> str:
        """Describe the entries of a directory as JSON, ordered by name."""
        directory = os.fspath(directory_path)
        entries: list[str] = []
        try:
            with os.scandir(directory) as listing:
                for entry in sorted(listing, key=lambda e: e.name):
                    is_dir = entry.is_dir()
                    size = entry.stat().st_size if entry.is_file() else 0
                    entries.append(
                        "    {\n"
                        f'      "name": {_q(entry.name)},\n'
                        f'      "path": {_q(entry.path)},\n'
                        f'      "is_directory": {"true" if is_dir else "false"},\n'
                        f'      "size": {size}\n'
                        "    }"
                    )
        except OSError as exc:
            self._log_operation(f"Error listing directory: {exc}", directory)
        result = (
            f'{{\n  "directory": {_q(directory)},\n'
            '  "files": [\n'
            + ",\n".join(entries)
            + "\n  ]\n}\n"
        )
        self._log_operation("Listed directory", directory)
        return result