from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from setup_order.analysis.ordering import OrderOptions
from setup_order.config import resolve_order_options
from setup_order.exceptions import ConfigurationError, ScriptParseError
from setup_order.ingest.registry import adapter_for_path
from setup_order.refactor.engine import DeclarationOrderEngine
from setup_order.refactor.model import OrderPlan
from setup_order.schema import FindingDTO, FixRequest, FixResponse, TextEditDTO

logger = logging.getLogger(__name__)

FIX_DOCUMENT_COMMAND = "setupOrder.fixDocument"


def plan_document(
    path: str | Path,
    text: str | None = None,
    *,
    engine: DeclarationOrderEngine | None = None,
) -> OrderPlan:
    """Plan the reordering edit for one document.

    ``text`` overrides the file contents (unsaved editor buffers). Parse
    failures become plan errors so one broken file never aborts a batch.
    """
    engine = engine or DeclarationOrderEngine()
    adapter = adapter_for_path(path)
    if adapter is None:
        return OrderPlan(warnings=[f"{path}: unsupported file type"])
    try:
        if text is None:
            block = adapter.load(Path(path))
        else:
            block = adapter.parse(text, str(path))
    except ScriptParseError as exc:
        logger.debug("parse failed: %s", exc)
        return OrderPlan(errors=[str(exc)])
    except OSError as exc:
        return OrderPlan(errors=[f"Failed to read {path}: {exc}"])
    if block is None:
        return OrderPlan()
    return engine.plan(block)


def plan_response(plan: OrderPlan, text: str, path: str = "") -> FixResponse:
    return FixResponse(
        path=path,
        edits=[
            TextEditDTO(
                path=edit.path,
                start=edit.start_position(text),
                end=edit.end_position(text),
                start_offset=edit.start,
                end_offset=edit.end,
                replacement=edit.replacement,
            )
            for edit in plan.edits
        ],
        findings=[
            FindingDTO(
                path=finding.path,
                line=finding.line,
                col=finding.column,
                code=finding.code,
                message=finding.message,
            )
            for finding in plan.findings
        ],
        warnings=plan.warnings,
        errors=plan.errors,
    )


def execute_fix_payload(payload: dict | None, root: Path | None = None) -> dict:
    try:
        request = FixRequest.model_validate(payload or {})
    except ValidationError as exc:
        return FixResponse(errors=[str(exc)]).model_dump()
    try:
        options = resolve_order_options(root=root, payload=request.options.as_payload())
    except ConfigurationError as exc:
        return FixResponse(path=request.path, errors=[str(exc)]).model_dump()
    text = request.text
    if text is None:
        try:
            text = Path(request.path).read_text(encoding="utf-8")
        except OSError as exc:
            return FixResponse(
                path=request.path, errors=[f"Failed to read {request.path}: {exc}"]
            ).model_dump()
    plan = plan_document(request.path, text, engine=DeclarationOrderEngine(options))
    return plan_response(plan, text, request.path).model_dump()


def default_options(root: Path | None) -> OrderOptions:
    return resolve_order_options(root=root)
