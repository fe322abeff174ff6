"""YAML layer of the settings sources.

Layout of the config directory::

    config/
      base/*.yaml                      always loaded
      environments/<APP_ENV>/*.yaml    merged on top

Files in one directory are read in name order, and later files win key by
key (nested mappings merge, everything else is replaced).
"""

from __future__ import annotations

import os
from functools import reduce
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic_settings import PydanticBaseSettingsSource


if TYPE_CHECKING:
    from pydantic.fields import FieldInfo


# src/city_recipes/core/config/yaml_source.py -> <repo>/config
DEFAULT_CONFIG_DIR = Path(__file__).resolve().parents[4] / "config"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` updated with ``override``, merging nested mappings."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _read_yaml(path: Path) -> dict[str, Any]:
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"{path} must contain a mapping at the top level"
        raise ValueError(msg)
    return data


def load_yaml_dir(directory: Path) -> dict[str, Any]:
    """Merge every ``*.yaml`` file in ``directory``; missing dirs are empty."""
    if not directory.is_dir():
        return {}
    return reduce(deep_merge, map(_read_yaml, sorted(directory.glob("*.yaml"))), {})


class MultiYamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by ``config/base`` plus the APP_ENV overrides.

    ``CONFIG_DIR`` relocates the config directory, ``APP_ENV`` (default
    ``development``) picks the overrides. Both are read from the process
    environment when the settings are built.
    """

    def __init__(self, settings_cls: type[Any]) -> None:
        super().__init__(settings_cls)
        config_dir = Path(os.getenv("CONFIG_DIR") or DEFAULT_CONFIG_DIR)
        app_env = os.getenv("APP_ENV", "development")
        self._data = deep_merge(
            load_yaml_dir(config_dir / "base"),
            load_yaml_dir(config_dir / "environments" / app_env),
        )

    def get_field_value(
        self,
        _field: FieldInfo,
        field_name: str,
    ) -> tuple[Any, str, bool]:
        value = self._data.get(field_name)
        return value, field_name, isinstance(value, (dict, list))

    def __call__(self) -> dict[str, Any]:
        return self._data
