# appfolders

Small building blocks for keeping an application's files in order on disk.
The package uses only the standard library.

## Modules

### `appfolders.config`

- `ComponentState` is a dataclass that holds one UI component's state. Its
  fields are `id`, `is_open`, `position`, `size`, `slider_float`,
  `slider_int`, `checkbox` and `color`.
- `serialize_component(state)` turns a state into a JSON-ready dict.
- `deserialize_component(data)` builds a state from a mapping. It uses the
  default for any key that is missing. It also uses the default for a
  `position`, `size` or `color` that has the wrong number of values.
- `list_config_files(directory)` returns the sorted names of the `.json` files
  in a directory. It returns an empty list if the directory cannot be read.
- `ConfigSystem(directory)` holds the component states for one directory:
  - `add_component(component_id)` registers a component.
  - `save_config(filename)` and `load_config(filename)` write and read the
    file `{"components": {...}}`.
  - `refresh_config_files()` rescans the directory.
  - `apply_config()` returns `{id: (position, size)}` for every open component.

### `appfolders.config_manager`

`ConfigurationManager(config_dir)` works on a configuration directory. By
default that directory is `Configurations`.

`initialize()` does one of two things:

- If the directory is missing, it creates the directory, writes
  `default.json` and `example.json` into it, and returns `True`.
- If the directory already exists, it returns `False`.

### `appfolders.file_registry`

`MonitoredFileStore(enable_monitoring, log_path)` creates, reads, updates and
deletes JSON files.

- `create_json_file` and `update_json_file` write flat objects of string pairs
  with the keys sorted.
- `create_json_file_raw` writes text exactly as it is given.
- The store keeps a `FileInfo` for each file it writes. It also keeps counters
  in `MonitoringStats`.
- You can get this data as JSON with `file_info_json`,
  `monitoring_stats_json`, `all_files_json` and `export_monitoring_data`.
- `list_directory_json` describes the entries of a directory.

While monitoring is on, every operation is appended to the log file as a JSON
array entry. `close()` (or leaving a `with` block) ends that array.

Missing files raise `FileNotFoundError`. Other I/O errors are raised as
`OSError`.

### `appfolders.file_system`

`FileSystem(app_name, max_log_size, log_file_base_name, base_dir)` manages the
directory `<base_dir>/<app_name>_data`. That directory holds a `backup` folder
and a dated log file, `<base>_<YYYYMMDD>.txt`.

- `initialize()` creates the directories and the log file.
- `create_file`, `read_file` and `backup_files` work on files in the data
  directory.
- `log(message, level)` queues a compact JSON line. `level` is a `LogLevel`:
  `INFO`, `WARN` or `ERROR`.
- `flush()` writes the queued lines straight away.
- `start_monitoring()` starts a thread. The thread writes queued lines,
  reports changed files through the `logging` module, and rotates the log.
  The log is rotated when the date changes or when the file reaches
  `max_log_size`. Rotation can also be triggered with `needs_log_rotation()`
  and `rotate_log_file()`.
- `start_async_backup()` starts a thread that runs every 30 seconds. Each
  run calls `backup_files()` and then `compress_old_logs()`.
  `compress_old_logs()` zips every `.txt` file other than the active log and
  removes the original.
- `close()` stops both threads and flushes the queue.

### `appfolders.folder_system`

`FolderSystem(app_name, max_log_size, base_path)` manages named folders under
a base path. If no base path is given, it uses
`%APPDATA%/appfolders/<app_name>` on Windows and `/tmp/appfolders/<app_name>`
elsewhere.

It provides these operations:

- `create_folder`
- `delete_folder`
- `create_file_in_folder`
- `read_file_in_folder`
- `backup_folder`, which copies the folder to `backup/<name>_<seconds>`
- `folder_path`
- `managed_folders`

Every operation is logged through the folder system's own `FileSystem`. An
existing folder raises `FileExistsError`. A missing folder raises
`FileNotFoundError`.

## What it does not do

- There is no command-line program and no graphical interface.
- `ConfigSystem.apply_config()` only returns positions and sizes. Placing
  windows is up to the caller.

## Installation

```
pip install .
```

To install with the test dependencies:

```
pip install ".[test]"
```

## Example

```python
from appfolders.folder_system import FolderSystem

folders = FolderSystem("demo", base_path="/tmp/appfolders-demo")
folders.initialize()
folders.create_folder("profiles")
folders.create_file_in_folder("profiles", "main.json", '{"name": "main"}')
print(folders.read_file_in_folder("profiles", "main.json"))
folders.backup_folder("profiles")
folders.close()
```

```python
from appfolders.config import ConfigSystem

configs = ConfigSystem(".")
configs.initialize()
configs.add_component("Window1")
configs.save_config("layout.json")
configs.load_config("layout.json")
print(configs.apply_config())
```

```python
from appfolders.file_system import FileSystem, LogLevel

with FileSystem("demo", 1024 * 1024) as files:
    files.initialize()
    files.log("started", LogLevel.INFO)
    files.flush()
```

## Running the tests

```
pytest
```