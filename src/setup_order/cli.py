from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer

from setup_order.commands import plan_document, plan_response
from setup_order.config import resolve_order_options
from setup_order.exceptions import ConfigurationError
from setup_order.ingest.registry import discover_files
from setup_order.refactor.engine import DeclarationOrderEngine
from setup_order.refactor.model import apply_edits

app = typer.Typer(add_completion=False)
logger = logging.getLogger(__name__)

EXIT_CLEAN = 0
EXIT_FINDINGS = 1
EXIT_ERROR = 2


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def check(
    paths: List[Path] = typer.Argument(None),
    root: Path = typer.Option(Path("."), "--root"),
    config: Optional[Path] = typer.Option(None, "--config"),
    fix: bool = typer.Option(False, "--fix/--no-fix"),
    json_output: bool = typer.Option(False, "--json"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Report (and optionally fix) out-of-order <script setup> declarations."""
    _configure_logging(verbose)
    try:
        options = resolve_order_options(root=root, config_path=config)
    except ConfigurationError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=EXIT_ERROR)
    engine = DeclarationOrderEngine(options)
    targets = discover_files(list(paths or [root]))
    logger.debug("checking %d file(s)", len(targets))

    responses: list[dict] = []
    remaining = 0
    failed = 0
    for path in targets:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            typer.echo(f"{path}: failed to read: {exc}", err=True)
            failed += 1
            continue
        plan = plan_document(path, text, engine=engine)
        responses.append(plan_response(plan, text, str(path)).model_dump())
        for error in plan.errors:
            failed += 1
            if not json_output:
                typer.echo(error, err=True)
        if fix and plan.edits:
            path.write_text(apply_edits(text, plan.edits), encoding="utf-8")
            if not json_output:
                typer.echo(f"Fixed {path}")
            continue
        remaining += len(plan.findings)
        if not json_output:
            for finding in plan.findings:
                typer.echo(finding.render())

    if json_output:
        typer.echo(json.dumps(responses, indent=2, sort_keys=True))
    if failed:
        raise typer.Exit(code=EXIT_ERROR)
    if remaining:
        raise typer.Exit(code=EXIT_FINDINGS)
    raise typer.Exit(code=EXIT_CLEAN)


@app.command("lsp")
def lsp() -> None:
    """Run the language server over stdio."""
    from setup_order.server import start

    start()


def main() -> None:  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
