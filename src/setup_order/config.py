from __future__ import annotations

from datetime import date, datetime, time
from pathlib import Path
from typing import TypeAlias
import tomllib

from setup_order.analysis.ordering import OrderOptions

DEFAULT_CONFIG_NAME = "setup_order.toml"
ORDER_SECTION = "declaration-order"

TomlScalar: TypeAlias = str | int | float | bool | None | date | datetime | time
TomlValue: TypeAlias = TomlScalar | list["TomlValue"] | dict[str, "TomlValue"]
TomlTable: TypeAlias = dict[str, TomlValue]

_KEY_ALIASES = {"sectionOrder": "section_order", "lifecycleOrder": "lifecycle_order"}


def _load_toml(path: Path) -> TomlTable:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError:
        return {}
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError:
        return {}
    return data if isinstance(data, dict) else {}


def load_config(root: Path | None = None, config_path: Path | None = None) -> TomlTable:
    if config_path is None:
        base = root if root is not None else Path.cwd()
        config_path = base / DEFAULT_CONFIG_NAME
    return _load_toml(config_path)


def order_defaults(
    root: Path | None = None, config_path: Path | None = None
) -> TomlTable:
    data = load_config(root=root, config_path=config_path)
    section = data.get(ORDER_SECTION, {})
    return section if isinstance(section, dict) else {}


def merge_payload(payload: TomlTable, defaults: TomlTable) -> TomlTable:
    merged = dict(defaults)
    for key, value in payload.items():
        if value is None:
            continue
        merged[key] = value
    return merged


def _canonical_keys(table: TomlTable) -> TomlTable:
    return {_KEY_ALIASES.get(key, key): value for key, value in table.items()}


def resolve_order_options(
    root: Path | None = None,
    config_path: Path | None = None,
    payload: TomlTable | None = None,
) -> OrderOptions:
    """Options from the config file overlaid with explicit payload values.

    Raises ConfigurationError for an invalid section order; this happens once,
    before any file is analyzed.
    """
    merged = merge_payload(
        _canonical_keys(payload or {}),
        _canonical_keys(order_defaults(root=root, config_path=config_path)),
    )
    return OrderOptions.from_mapping(merged)
