import json

import pytest

from appfolders.config_manager import ConfigurationManager


def test_initialize_creates_directory_and_defaults(tmp_path):
    directory = tmp_path / "Configurations"
    manager = ConfigurationManager(directory)
    assert manager.initialize() is True
    assert sorted(p.name for p in directory.iterdir()) == ["default.json", "example.json"]
    assert json.loads((directory / "default.json").read_text()) == {"components": {}}


def test_example_config_contents(tmp_path):
    directory = tmp_path / "cfg"
    ConfigurationManager(directory).initialize()
    example = json.loads((directory / "example.json").read_text())
    window = example["components"]["Window1"]
    assert window["slider_int"] == 42
    assert window["position"] == [100, 100]
    assert window["size"] == [300, 200]
    assert window["checkbox"] is True


def test_initialize_existing_directory_leaves_files(tmp_path):
    directory = tmp_path / "cfg"
    manager = ConfigurationManager(directory)
    manager.initialize()
    (directory / "default.json").write_text("changed")
    assert manager.initialize() is False
    assert (directory / "default.json").read_text() == "changed"


def test_create_default_configs_missing_directory_raises(tmp_path):
    manager = ConfigurationManager(tmp_path / "nowhere")
    with pytest.raises(FileNotFoundError):
        manager.create_default_configs()