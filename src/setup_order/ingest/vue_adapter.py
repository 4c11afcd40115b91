from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path

from setup_order.ingest.adapter_contract import LanguageAdapter, SetupBlock
from setup_order.ingest.script_parser import parse_statements

logger = logging.getLogger(__name__)

_SCRIPT_RE = re.compile(
    r"<script\b(?P<attrs>[^>]*)>(?P<body>.*?)</script\s*>",
    re.DOTALL | re.IGNORECASE,
)
_SETUP_ATTR_RE = re.compile(r"(?:^|\s)setup(?=\s|=|/|$)", re.IGNORECASE)
_LANG_ATTR_RE = re.compile(r"""(?:^|\s)lang\s*=\s*["']?(?P<lang>[\w-]+)""", re.IGNORECASE)
_HTML_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)

PRUNED_DIRS = frozenset({"node_modules", "dist", "build", "coverage", "__pycache__"})


@dataclass(frozen=True)
class ScriptSection:
    start: int
    end: int
    language: str


def find_setup_script(document: str) -> ScriptSection | None:
    """Locate the body of ``<script setup>`` in a single-file component."""
    # Blank out HTML comments without shifting offsets.
    masked = _HTML_COMMENT_RE.sub(lambda m: " " * len(m.group(0)), document)
    for match in _SCRIPT_RE.finditer(masked):
        attrs = match.group("attrs")
        if not _SETUP_ATTR_RE.search(attrs):
            continue
        lang = _LANG_ATTR_RE.search(attrs)
        return ScriptSection(
            start=match.start("body"),
            end=match.end("body"),
            language=lang.group("lang").lower() if lang else "js",
        )
    return None


def walk_files(paths: list[Path], extensions: tuple[str, ...]) -> list[Path]:
    out: list[Path] = []
    for path in paths:
        if path.is_dir():
            for root, dirnames, filenames in os.walk(path, topdown=True):
                dirnames[:] = sorted(
                    name for name in dirnames if name not in PRUNED_DIRS and not name.startswith(".")
                )
                for filename in sorted(filenames):
                    if filename.lower().endswith(extensions):
                        out.append(Path(root) / filename)
        elif path.suffix.lower() in extensions:
            out.append(path)
    return sorted(set(out))


class VueAdapter(LanguageAdapter):
    language_id = "vue"
    file_extensions = (".vue",)

    def discover_files(self, paths: list[Path]) -> list[Path]:
        return walk_files(paths, self.file_extensions)

    def load(self, path: Path) -> SetupBlock | None:
        return self.parse(path.read_text(encoding="utf-8"), str(path))

    def parse(self, text: str, path: str = "") -> SetupBlock | None:
        section = find_setup_script(text)
        if section is None:
            logger.debug("%s: no <script setup> block", path or "<document>")
            return None
        statements = parse_statements(
            text,
            start=section.start,
            end=section.end,
            language=section.language,
            path=path,
        )
        return SetupBlock(path=path, source=text, statements=statements, language=section.language)


class ScriptAdapter(LanguageAdapter):
    """Treats a whole script module as the setup block."""

    language_id = "script"
    file_extensions = (".ts", ".mts", ".cts", ".tsx", ".js", ".mjs", ".cjs", ".jsx")

    def discover_files(self, paths: list[Path]) -> list[Path]:
        return walk_files(paths, self.file_extensions)

    def load(self, path: Path) -> SetupBlock | None:
        return self.parse(path.read_text(encoding="utf-8"), str(path))

    def parse(self, text: str, path: str = "") -> SetupBlock | None:
        language = Path(path).suffix.lstrip(".").lower() or "ts"
        statements = parse_statements(text, language=language, path=path)
        return SetupBlock(path=path, source=text, statements=statements, language=language)
