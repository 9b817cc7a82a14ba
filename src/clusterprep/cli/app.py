# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clusterprep/cli/app.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from clusterprep.config.loader import load_config
from clusterprep.errors import PreflightError
from clusterprep.k8s.client import connect
from clusterprep.logging.log import init_logging
from clusterprep.observers.sinks import ConsoleObserver, JsonFileObserver, LoggerObserver
from clusterprep.preflight.kubeconfig import patch_kubeconfig_file
from clusterprep.preflight.runner import run_preflight


# ------------------------------------------------------------------------------
# CLI setup
# ------------------------------------------------------------------------------

app = typer.Typer(help="Cluster pre-flight checks")


@app.command()
def check(
    config: Path = typer.Option(..., "--config", "-c", exists=True, dir_okay=False, help="Pre-flight YAML config"),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir", help="Where run logs are written"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="DEBUG output on the console"),
) -> None:
    """
    Check flavor, namespace and default storage class of the target cluster,
    and optionally patch the kubeconfig for non-interactive use.
    """
    run_log = init_logging(base_dir=log_dir, verbose=verbose)
    cfg = load_config(config)

    observers = [
        ConsoleObserver(),
        LoggerObserver(run_log.logger),
        JsonFileObserver(run_log.events_path),
    ]

    try:
        cluster = connect(cfg.kubeconfig, cfg.context)
        report = run_preflight(cfg, cluster, observers=observers, run_id=run_log.run_id)
    except PreflightError as e:
        typer.secho(f"pre-flight failed: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    for w in report.warnings:
        typer.secho(f"warning: {w}", fg=typer.colors.YELLOW)
    typer.secho(f"pre-flight OK: {report.summary()}", fg=typer.colors.GREEN)


@app.command("patch-kubeconfig")
def patch_kubeconfig(
    src: Path = typer.Argument(..., exists=True, dir_okay=False, help="kubeconfig to patch"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write here instead of in place"),
) -> None:
    """Rewrite auth-provider cmd-path entries to bare executable names."""
    try:
        written = patch_kubeconfig_file(src, output)
    except PreflightError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    typer.echo(f"patched {written}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
