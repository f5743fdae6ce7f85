"""Component state persistence in JSON configuration files."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Sequence

_DEFAULT_POSITION = (0.0, 0.0)
_DEFAULT_SIZE = (0.0, 0.0)
_DEFAULT_COLOR = (1.0, 1.0, 1.0, 1.0)


@dataclass
class ComponentState:
    """Persisted state of one UI component."""

    id: str = ""
    is_open: bool = True
    position: tuple[float, float] = _DEFAULT_POSITION
    size: tuple[float, float] = _DEFAULT_SIZE
    slider_float: float = 0.0
    slider_int: int = 0
    checkbox: bool = False
    color: tuple[float, float, float, float] = _DEFAULT_COLOR


def serialize_component(state: ComponentState) -> dict[str, Any]:
    """Return the JSON-ready mapping for a component state."""
    return {
        "id": state.id,
        "is_open": state.is_open,
        "position": list(state.position),
        "size": list(state.size),
        "slider_float": state.slider_float,
        "slider_int": state.slider_int,
        "checkbox": state.checkbox,
        "color": list(state.color),
    }


def _vector(data: Mapping[str, Any], key: str, default: Sequence[float]) -> tuple[float, ...]:
    values = [float(v) for v in data.get(key, default)]
    if len(values) != len(default):
        return tuple(default)
    return tuple(values)


def deserialize_component(data: Mapping[str, Any]) -> ComponentState:
    """Build a component state from a mapping, falling back to defaults."""
    return ComponentState(
        id=str(data.get("id", "")),
        is_open=bool(data.get("is_open", True)),
        position=_vector(data, "position", _DEFAULT_POSITION),
        size=_vector(data, "size", _DEFAULT_SIZE),
        slider_float=float(data.get("slider_float", 0.0)),
        slider_int=int(data.get("slider_int", 0)),
        checkbox=bool(data.get("checkbox", False)),
        color=_vector(data, "color", _DEFAULT_COLOR),
    )


def list_config_files(directory: str | os.PathLike[str] = ".") -> list[str]:
    """Return the names of the ``.json`` files in a directory, sorted."""
    try:
        return sorted(
            entry.name
            for entry in Path(directory).iterdir()
            if entry.suffix == ".json"
        )
    except OSError:
        return []


class ConfigSystem:
    """Keeps component states and saves or loads them as JSON files."""

    def __init__(self, directory: str | os.PathLike[str] = ".") -> None:
        self.directory = Path(directory)
        self.components: dict[str, ComponentState] = {}
        self.current_config_file = ""
        self.config_files: list[str] = []
        self.is_initialized = False

    def initialize(self) -> None:
        """Mark the system ready and scan for configuration files."""
        self.is_initialized = True
        self.refresh_config_files()

    def refresh_config_files(self) -> list[str]:
        """Rescan the directory for configuration files."""
        self.config_files = list_config_files(self.directory)
        return self.config_files

    def add_component(self, component_id: str) -> ComponentState:
        """Register a component unless it is already known; return its state."""
        if component_id not in self.components:
            self.components[component_id] = ComponentState(id=component_id)
        return self.components[component_id]

    def save_config(self, filename: str) -> Path:
        """Write all component states to ``filename`` in the directory."""
        document = {
            "components": {
                component_id: serialize_component(state)
                for component_id, state in self.components.items()
            }
        }
        path = self.directory / filename
        path.write_text(json.dumps(document, indent=4), encoding="utf-8")
        self.refresh_config_files()
        self.current_config_file = filename
        return path

    def load_config(self, filename: str) -> None:
        """Read component states from ``filename``, replacing those with the same id."""
        path = self.directory / filename
        document = json.loads(path.read_text(encoding="utf-8"))
        components = (document or {}).get("components") or {}
        for component_id, data in components.items():
            self.components[component_id] = deserialize_component(data)
        self.current_config_file = filename

    def apply_config(self) -> dict[str, tuple[tuple[float, ...], tuple[float, ...]]]:
        """Return the position and size to apply to every open component."""
        return {
            component_id: (state.position, state.size)
            for component_id, state in self.components.items()
            if state.is_open
        }