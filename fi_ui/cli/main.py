"""
Command-line interface for fs-inventory.

Walks the configured roots, reports metadata and the run lifecycle to the
collector, and offers local-only helpers for inspecting paths and configs.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import List, Optional

import typer

from fi_common.api import ConfigurationError, configure_logging
from fi_runner.api import (
    ChecksumComputer,
    InventoryConfig,
    InventoryOrchestrator,
    MetadataExtractor,
    PropertyKind,
    RunSummary,
    resolve_properties,
)
from fi_ui.wiring import UIContext

LOCAL_RUN_ID = "local"

ctx_store = UIContext()

app = typer.Typer(help="Inventory filesystem roots and report them to a collector.", no_args_is_help=True)
config_app = typer.Typer(help="Inspect the agent configuration.", no_args_is_help=True)
app.add_typer(config_app, name="config")

_CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="Config file; defaults to $FI_CONFIG_PATH, ./config.json or ~/.config/fi/config.json.",
)


@app.callback(invoke_without_command=True)
def entry(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
    log_json: bool = typer.Option(False, "--log-json", help="Emit logs as JSON lines."),
    headless: bool = typer.Option(False, "--headless", help="Record messages instead of printing them."),
) -> None:
    """Global options shared by every command."""
    configure_logging(debug=debug, json=log_json or None, force=True)
    ctx_store.headless = headless

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _load_config(config: Optional[Path]) -> tuple[InventoryConfig, Path]:
    try:
        return ctx_store.config_repository.load(config)
    except ConfigurationError as exc:
        ctx_store.present.error(str(exc))
        for message in exc.context.get("errors", []):
            ctx_store.present.error(f"  {message}")
        raise typer.Exit(1)


def _present_summary(summary: RunSummary) -> None:
    run_id = summary.run.id if summary.run else "-"
    for report in summary.paths:
        ctx_store.present.info(
            f"{report.root}: {report.file_count} files, "
            f"{report.record_count} entries, upload status {report.upload_status}"
        )
    if summary.success:
        ctx_store.present.success(
            f"Run {run_id} completed: {summary.files_count} files across "
            f"{len(summary.paths)} path(s)"
        )
        return
    ctx_store.present.error(f"Run {run_id} failed: {summary.error}")
    if summary.run is not None:
        ctx_store.present.warning(f"Run {run_id} was not closed on the collector.")


@app.command("run")
def run_command(
    config: Optional[Path] = _CONFIG_OPTION,
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Do not print the extracted properties."
    ),
) -> None:
    """Walk every configured path and report it to the collector."""
    cfg, resolved = _load_config(config)
    ctx_store.present.info(f"Loaded config: {resolved}")
    if quiet:
        cfg = cfg.model_copy(update={"print_properties": False})

    try:
        orchestrator = InventoryOrchestrator.from_config(
            cfg, reporter=ctx_store.property_report()
        )
    except ValueError as exc:
        ctx_store.present.error(str(exc))
        raise typer.Exit(1)

    summary = orchestrator.execute()
    _present_summary(summary)
    if not summary.success:
        raise typer.Exit(1)


@app.command("scan")
def scan_command(
    path: Path = typer.Argument(..., help="Directory or file to walk."),
    properties: Optional[List[str]] = typer.Option(
        None,
        "--property",
        "-p",
        help="Property to extract (repeatable); defaults to the config or all properties.",
    ),
    config: Optional[Path] = _CONFIG_OPTION,
) -> None:
    """Walk a path locally and print its metadata without contacting the collector."""
    cfg = _load_config(config)[0] if config is not None else None
    names: list[str]
    if properties:
        names = list(properties)
    elif cfg is not None:
        names = list(cfg.properties)
    else:
        names = [kind.value for kind in PropertyKind]

    selected = resolve_properties(names)
    ignored = sorted({n for n in names if n.strip().lower() not in {k.value for k in selected}})
    if ignored:
        ctx_store.present.warning(f"Ignoring unrecognized properties: {', '.join(ignored)}")

    root = os.path.abspath(os.path.expanduser(str(path)))
    checksum = ChecksumComputer(cfg.checksum_algorithm) if cfg is not None else None
    extractor = MetadataExtractor(names, LOCAL_RUN_ID, checksum=checksum)
    outcome = extractor.extract(root)
    if not outcome.ok:
        ctx_store.present.error(str(outcome.error))
        raise typer.Exit(1)
    result = outcome.unwrap()
    ctx_store.property_report().show(root, result.records, extractor.properties)
    ctx_store.present.success(
        f"{len(result.records)} entries, {result.file_count} files under {root}"
    )


@config_app.command("show")
def config_show(config: Optional[Path] = _CONFIG_OPTION) -> None:
    """Print the resolved configuration as JSON."""
    cfg, resolved = _load_config(config)
    ctx_store.present.panel(
        json.dumps(cfg.model_dump(mode="json"), indent=2), title=str(resolved)
    )


@config_app.command("validate")
def config_validate(config: Optional[Path] = _CONFIG_OPTION) -> None:
    """Validate the configuration and report unrecognized properties."""
    cfg, resolved = _load_config(config)
    recognized = {kind.value for kind in cfg.property_kinds()}
    unknown = [name for name in cfg.properties if name.strip().lower() not in recognized]
    if unknown:
        ctx_store.present.warning(f"Unrecognized properties are ignored: {', '.join(unknown)}")
    if not recognized:
        ctx_store.present.warning("No recognized properties; records will only carry the run id.")
    ctx_store.present.success(
        f"{resolved} is valid: {len(cfg.paths)} path(s), collector {cfg.collector_url}"
    )


def main() -> None:
    """Console script entrypoint (Typer app)."""
    app()


if __name__ == "__main__":
    main()
