# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clusterprep/observers/sinks.py
from __future__ import annotations

import json
import logging
from pathlib import Path

import typer

from .events import BaseEvent, PreflightFailed

_BASE_FIELDS = ("ts", "run_id", "env", "context")


def _fields(event: BaseEvent) -> str:
    return ", ".join(f"{k}={v}" for k, v in event.dict().items() if k not in _BASE_FIELDS)


class ConsoleObserver:
    def notify(self, event: BaseEvent) -> None:
        color = typer.colors.RED if isinstance(event, PreflightFailed) else None
        typer.secho(
            f"[{event.ts}] {event.__class__.__name__} ctx={event.context} {{{_fields(event)}}}",
            fg=color,
        )


class LoggerObserver:
    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def notify(self, event: BaseEvent) -> None:
        level = logging.ERROR if isinstance(event, PreflightFailed) else logging.INFO
        self.logger.log(level, "[EVENT] %s run=%s: %s", event.__class__.__name__, event.run_id, _fields(event))


class JsonFileObserver:
    """Appends one JSON object per event (JSONL)."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def notify(self, event: BaseEvent) -> None:
        record = {"type": event.__class__.__name__, **event.dict()}
        with self.path.open("a") as f:
            f.write(json.dumps(record, default=str) + "\n")
