import json
import os
from dataclasses import asdict

import pytest

from appfolders.file_registry import FileInfo, MonitoredFileStore, MonitoringStats


@pytest.fixture
def store(tmp_path):
    with MonitoredFileStore(True, tmp_path / "monitor.json") as s:
        yield s


def _stats(store):
    return json.loads(store.monitoring_stats_json())


def test_file_info_json_round_trip():
    info = FileInfo("a.json", "t1", "t2", 3, "json")
    assert json.loads(info.to_json()) == asdict(info)


def test_monitoring_stats_json_round_trip():
    stats = MonitoringStats()
    assert json.loads(stats.to_json()) == asdict(stats)


def test_create_and_read_round_trip(store, tmp_path):
    path = tmp_path / "data.json"
    data = {"b": "two", "a": "one"}
    store.create_json_file(path, data)
    assert json.loads(store.read_json_file(path)) == data
    stats = _stats(store)
    assert stats["files_created"] == stats["files_read"]
    assert stats["last_operation"] == "Read JSON file"


def test_create_writes_keys_sorted(store, tmp_path):
    path = tmp_path / "d.json"
    store.create_json_file(path, {"z": "1", "a": "2"})
    assert list(json.loads(path.read_text())) == ["a", "z"]


def test_create_raw_writes_content_verbatim(store, tmp_path):
    path = tmp_path / "raw.json"
    content = '[1, 2, 3]'
    store.create_json_file_raw(path, content)
    assert path.read_text() == content
    assert _stats(store)["last_operation"] == "Created raw JSON file"


def test_file_info_records_size(store, tmp_path):
    path = tmp_path / "x.json"
    store.create_json_file(path, {"k": "v"})
    info = json.loads(store.file_info_json(path))
    assert info["size"] == os.path.getsize(path)
    assert info["content_type"] == "json"
    assert info["path"] == str(path)


def test_file_info_unknown(store, tmp_path):
    assert store.file_info_json(tmp_path / "unknown.json") == "{}"


def test_update_existing_file(store, tmp_path):
    path = tmp_path / "u.json"
    store.create_json_file(path, {"k": "old"})
    store.update_json_file(path, {"k": "new"})
    assert json.loads(path.read_text()) == {"k": "new"}
    assert _stats(store)["last_operation"] == "Updated JSON file"


def test_update_missing_file_raises(store, tmp_path):
    with pytest.raises(FileNotFoundError):
        store.update_json_file(tmp_path / "none.json", {"k": "v"})
    assert _stats(store)["last_operation"] == "File does not exist for update"


def test_delete_file_forgets_it(store, tmp_path):
    path = tmp_path / "gone.json"
    store.create_json_file(path, {"k": "v"})
    store.delete_file(path)
    assert not path.exists()
    assert json.loads(store.all_files_json())["total_files"] == 0
    assert store.file_info_json(path) == "{}"


def test_delete_missing_file_raises(store, tmp_path):
    with pytest.raises(FileNotFoundError):
        store.delete_file(tmp_path / "none.json")
    assert _stats(store)["files_deleted"] == 0


def test_create_in_missing_directory_raises(store, tmp_path):
    with pytest.raises(OSError):
        store.create_json_file(tmp_path / "no" / "dir.json", {"k": "v"})
    assert _stats(store)["files_created"] == 0
    assert _stats(store)["last_operation"] == "Failed to create file"


def test_all_files_listed_by_path(store, tmp_path):
    for name in ("b.json", "a.json"):
        store.create_json_file(tmp_path / name, {"k": "v"})
    listing = json.loads(store.all_files_json())
    paths = [entry["path"] for entry in listing["files"]]
    assert paths == sorted(paths)
    assert listing["total_files"] == len(paths)


def test_export_monitoring_data(store, tmp_path):
    store.create_json_file(tmp_path / "a.json", {"k": "v"})
    export = tmp_path / "export.json"
    store.export_monitoring_data(export)
    document = json.loads(export.read_text())
    assert document["registered_files"]["total_files"] == len(document["registered_files"]["files"])
    assert document["monitoring_statistics"]["files_created"] == len(document["registered_files"]["files"])
    assert _stats(store)["last_operation"] == "Exported monitoring data"


def test_log_file_is_json_array_after_close(tmp_path):
    log_path = tmp_path / "monitor.json"
    store = MonitoredFileStore(True, log_path)
    store.create_json_file(tmp_path / "a.json", {"k": "v"})
    store.close()
    entries = json.loads(log_path.read_text())
    operations = [entry["operation"] for entry in entries]
    assert operations[0] == "File_System initialized"
    assert "Created JSON file" in operations
    assert operations[-1] == "File_System destroyed"


def test_close_twice_keeps_log_valid(tmp_path):
    log_path = tmp_path / "monitor.json"
    store = MonitoredFileStore(True, log_path)
    store.close()
    store.close()
    assert [e["operation"] for e in json.loads(log_path.read_text())] == [
        "File_System initialized",
        "File_System destroyed",
    ]


def test_monitoring_disabled_writes_no_log(tmp_path):
    log_path = tmp_path / "monitor.json"
    with MonitoredFileStore(False, log_path) as store:
        store.create_json_file(tmp_path / "a.json", {"k": "v"})
    assert not log_path.exists()


def test_set_monitoring_updates_last_operation(store):
    store.set_monitoring(False)
    assert _stats(store)["last_operation"] == "Monitoring disabled"
    assert store.monitoring_enabled is False


def test_file_exists_and_size(store, tmp_path):
    path = tmp_path / "s.txt"
    assert store.file_size(path) == 0
    assert store.file_exists(path) is False
    path.write_text("hello")
    assert store.file_exists(path) is True
    assert store.file_size(path) == len("hello")


def test_list_directory_json(store, tmp_path):
    target = tmp_path / "dir"
    target.mkdir()
    (target / "sub").mkdir()
    (target / "file.txt").write_text("abc")
    listing = json.loads(store.list_directory_json(target))
    assert listing["directory"] == str(target)
    by_name = {entry["name"]: entry for entry in listing["files"]}
    assert sorted(by_name) == ["file.txt", "sub"]
    assert by_name["sub"]["is_directory"] is True
    assert by_name["sub"]["size"] == 0
    assert by_name["file.txt"]["size"] == len("abc")
    assert by_name["file.txt"]["path"] == os.path.join(str(target), "file.txt")


def test_list_missing_directory(store, tmp_path):
    listing = json.loads(store.list_directory_json(tmp_path / "missing"))
    assert listing["files"] == []
    assert _stats(store)["last_operation"] == "Listed directory"