from __future__ import annotations

from pathlib import Path

from setup_order.ingest.adapter_contract import LanguageAdapter
from setup_order.ingest.vue_adapter import ScriptAdapter, VueAdapter


_ADAPTERS_BY_LANGUAGE: dict[str, LanguageAdapter] = {}
_ADAPTERS_BY_EXTENSION: dict[str, LanguageAdapter] = {}

# Directories are only searched for single-file components.
DISCOVERY_LANGUAGE_ID = "vue"


def register_adapter(adapter: LanguageAdapter) -> None:
    _ADAPTERS_BY_LANGUAGE[adapter.language_id] = adapter
    for extension in adapter.file_extensions:
        _ADAPTERS_BY_EXTENSION[extension.lower()] = adapter


def adapter_for_extension(extension: str) -> LanguageAdapter | None:
    return _ADAPTERS_BY_EXTENSION.get(extension.lower())


def adapter_for_path(path: Path | str) -> LanguageAdapter | None:
    return adapter_for_extension(Path(path).suffix)


def discover_files(paths: list[Path]) -> list[Path]:
    discovery = _ADAPTERS_BY_LANGUAGE[DISCOVERY_LANGUAGE_ID]
    directories = [path for path in paths if path.is_dir()]
    files = [
        path
        for path in paths
        if not path.is_dir() and adapter_for_path(path) is not None
    ]
    return sorted(set(discovery.discover_files(directories)) | set(files))


register_adapter(VueAdapter())
register_adapter(ScriptAdapter())
