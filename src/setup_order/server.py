from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable
from urllib.parse import unquote, urlparse

from pygls.lsp.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_CODE_ACTION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DID_SAVE,
    CodeAction,
    CodeActionKind,
    CodeActionParams,
    Diagnostic,
    DiagnosticSeverity,
    LogMessageParams,
    MessageType,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextEdit,
    WorkspaceEdit,
)

from setup_order import __version__
from setup_order.analysis.ordering import OrderOptions
from setup_order.commands import (
    FIX_DOCUMENT_COMMAND,
    default_options,
    execute_fix_payload,
    plan_document,
)
from setup_order.exceptions import ConfigurationError
from setup_order.refactor.engine import DeclarationOrderEngine
from setup_order.refactor.model import Finding, offset_to_position

logger = logging.getLogger(__name__)

server = LanguageServer("setup-order", __version__)
SOURCE = "setup-order"
FIX_TITLE = "Reorder <script setup> declarations"


def _uri_to_path(uri: str) -> Path:
    parsed = urlparse(uri)
    if parsed.scheme == "file":
        return Path(unquote(parsed.path))
    return Path(uri)


def _workspace_root(ls: LanguageServer) -> Path | None:
    root = getattr(ls.workspace, "root_path", None)
    return Path(root) if root else None


def _finding_range(text: str, finding: Finding) -> Range:
    line_end = text.find("\n", finding.offset)
    end_line, end_character = offset_to_position(
        text, line_end if line_end != -1 else len(text)
    )
    return Range(
        start=Position(line=finding.line, character=finding.column),
        end=Position(line=end_line, character=end_character),
    )


def diagnostics_for_document(path: Path, text: str, options: OrderOptions) -> list[Diagnostic]:
    plan = plan_document(path, text, engine=DeclarationOrderEngine(options))
    return [
        Diagnostic(
            range=_finding_range(text, finding),
            message=finding.message,
            severity=DiagnosticSeverity.Warning,
            code=finding.code,
            source=SOURCE,
        )
        for finding in plan.findings
    ]


def code_actions_for_document(
    uri: str,
    path: Path,
    text: str,
    options: OrderOptions,
    diagnostics: list[Diagnostic] | None = None,
) -> list[CodeAction]:
    plan = plan_document(path, text, engine=DeclarationOrderEngine(options))
    actions: list[CodeAction] = []
    for edit in plan.edits:
        start_line, start_character = edit.start_position(text)
        end_line, end_character = edit.end_position(text)
        actions.append(
            CodeAction(
                title=FIX_TITLE,
                kind=CodeActionKind.QuickFix,
                diagnostics=[item for item in diagnostics or [] if item.source == SOURCE],
                is_preferred=True,
                edit=WorkspaceEdit(
                    changes={
                        uri: [
                            TextEdit(
                                range=Range(
                                    start=Position(line=start_line, character=start_character),
                                    end=Position(line=end_line, character=end_character),
                                ),
                                new_text=edit.replacement,
                            )
                        ]
                    }
                ),
            )
        )
    return actions


def _options_or_report(ls: LanguageServer) -> OrderOptions | None:
    try:
        return default_options(_workspace_root(ls))
    except ConfigurationError as exc:
        ls.window_log_message(LogMessageParams(type=MessageType.Error, message=str(exc)))
        return None


def _publish(ls: LanguageServer, uri: str) -> None:
    options = _options_or_report(ls)
    if options is None:
        return
    doc = ls.workspace.get_text_document(uri)
    diagnostics = diagnostics_for_document(_uri_to_path(uri), doc.source, options)
    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.command(FIX_DOCUMENT_COMMAND)
def execute_fix(ls: LanguageServer, payload: dict | None = None) -> dict:
    return execute_fix_payload(payload, _workspace_root(ls))


@server.feature(TEXT_DOCUMENT_CODE_ACTION)
def code_action(ls: LanguageServer, params: CodeActionParams) -> list[CodeAction]:
    options = _options_or_report(ls)
    if options is None:
        return []
    uri = params.text_document.uri
    doc = ls.workspace.get_text_document(uri)
    return code_actions_for_document(
        uri,
        _uri_to_path(uri),
        doc.source,
        options,
        diagnostics=list(params.context.diagnostics or []),
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params) -> None:
    _publish(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params) -> None:
    _publish(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_SAVE)
def did_save(ls: LanguageServer, params) -> None:
    _publish(ls, params.text_document.uri)


def start(start_fn: Callable[[], None] | None = None) -> None:
    """Start the language server on stdio."""
    (start_fn or server.start_io)()


if __name__ == "__main__":  # pragma: no cover
    start()  # pragma: no cover
