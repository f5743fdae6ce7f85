"""Named folders under a per-application data root, with logged operations."""

from __future__ import annotations

import os
import shutil
import threading
import time
from datetime import datetime
from pathlib import Path

from appfolders.file_system import FileSystem

VENDOR_DIR = "appfolders"


def _default_base_path(app_name: str) -> Path:
    if os.name == "nt":
        root = os.environ.get("APPDATA") or "C:/Temp"
    else:
        root = "/tmp"
    return Path(root) / VENDOR_DIR / app_name


class FolderSystem:
    """Creates, deletes, fills and backs up folders, logging each operation."""

    def __init__(
        self,
        app_name: str,
        max_log_size: int = 1024 * 1024,
        base_path: str | os.PathLike[str] | None = None,
    ) -> None:
        self.app_name = app_name
        self.base_path = (
            Path(base_path) if base_path is not None else _default_base_path(app_name)
        )
        self.file_system = FileSystem(app_name, max_log_size, base_dir=self.base_path)
        self._lock = threading.Lock()
        self._managed: list[str] = []

    def __enter__(self) -> FolderSystem:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def _log(self, message: str) -> None:
        stamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        self.file_system.log(f"{stamp} [FolderSystem] - {message}")

    def folder_path(self, folder_name: str) -> Path:
        """Return the full path of a folder."""
        return self.base_path / folder_name

    def managed_folders(self) -> list[str]:
        """Return the folders created by this instance and not deleted since."""
        with self._lock:
            return list(self._managed)

    def initialize(self) -> None:
        """Set up the underlying file system and the base directory."""
        try:
            self.file_system.initialize()
        except OSError:
            self._log("Failed to initialize file system")
            raise
        self.base_path.mkdir(parents=True, exist_ok=True)
        self._log(f"Folder system initialized at: {self.base_path}")

    def create_folder(self, folder_name: str) -> Path:
        """Create a new folder; raise FileExistsError if it already exists."""
        with self._lock:
            path = self.folder_path(folder_name)
            if path.exists():
                self._log(f"Folder already exists: {folder_name}")
                raise FileExistsError(f"Folder already exists: {folder_name}")
            try:
                path.mkdir()
            except OSError as exc:
                self._log(f"Error creating folder {folder_name}: {exc}")
                raise
            self._managed.append(folder_name)
            self._log(f"Created folder: {folder_name}")
            return path

    def delete_folder(self, folder_name: str) -> None:
        """Remove a folder and everything in it."""
        with self._lock:
            path = self.folder_path(folder_name)
            if not path.exists():
                self._log(f"Folder does not exist: {folder_name}")
                raise FileNotFoundError(f"Folder does not exist: {folder_name}")
            try:
                shutil.rmtree(path)
            except OSError as exc:
                self._log(f"Error deleting folder {folder_name}: {exc}")
                raise
            self._managed = [name for name in self._managed if name != folder_name]
            self._log(f"Deleted folder: {folder_name}")

    def create_file_in_folder(self, folder_name: str, filename: str, content: str) -> Path:
        """Write a file inside an existing folder."""
        with self._lock:
            folder = self.folder_path(folder_name)
            if not folder.exists():
                self._log(f"Folder does not exist for file creation: {folder_name}")
                raise FileNotFoundError(f"Folder does not exist: {folder_name}")
            path = folder / filename
            try:
                path.write_text(content, encoding="utf-8")
            except OSError:
                self._log(f"Failed to create file {filename} in folder {folder_name}")
                raise
            self._log(f"Created file {filename} in folder {folder_name}")
            return path

    def read_file_in_folder(self, folder_name: str, filename: str) -> str:
        """Return the text of a file inside a folder."""
        with self._lock:
            folder = self.folder_path(folder_name)
            if not folder.exists():
                self._log(f"Folder does not exist for reading: {folder_name}")
                raise FileNotFoundError(f"Folder does not exist: {folder_name}")
            try:
                text = (folder / filename).read_text(encoding="utf-8")
            except OSError:
                self._log(f"Failed to read file {filename} from folder {folder_name}")
                raise
            self._log(f"Read file {filename} from folder {folder_name}")
            return text

    def backup_folder(self, folder_name: str) -> Path:
        """Copy a folder's contents to ``backup/<name>_<seconds>``; return that path."""
        with self._lock:
            folder = self.folder_path(folder_name)
            if not folder.exists():
                self._log(f"Folder does not exist for backup: {folder_name}")
                raise FileNotFoundError(f"Folder does not exist: {folder_name}")
            backup_path = self.base_path / "backup" / f"{folder_name}_{int(time.time())}"
            try:
                backup_path.mkdir(parents=True, exist_ok=True)
                for entry in folder.iterdir():
                    target = backup_path / entry.name
                    if entry.is_dir():
                        shutil.copytree(entry, target)
                    else:
                        shutil.copy2(entry, target)
            except OSError as exc:
                self._log(f"Error backing up folder {folder_name}: {exc}")
                raise
            self._log(f"Backed up folder {folder_name} to {backup_path}")
            return backup_path

    def start_monitoring(self) -> None:
        self.file_system.start_monitoring()
        self._log("Started monitoring for all folders")

    def stop_monitoring(self) -> None:
        self.file_system.stop_monitoring()
        self._log("Stopped monitoring for all folders")

    def close(self) -> None:
        """Stop monitoring and shut down the underlying file system."""
        self.stop_monitoring()
        self.file_system.close()