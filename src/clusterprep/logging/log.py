# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clusterprep/logging/log.py
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

DEFAULT_LOG_DIR = Path.home() / ".clusterprep" / "logs"
LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"


@dataclass(frozen=True)
class RunLog:
    """Where a single pre-flight run writes its trace and its event stream."""

    logger: logging.Logger
    run_id: str
    log_path: Path
    events_path: Path


def _prune(base_dir: Path, name: str, keep: int) -> None:
    runs = sorted(base_dir.glob(f"{name}-*.log"), key=lambda p: p.stat().st_mtime)
    for old in runs[: max(len(runs) - keep, 0)]:
        old.unlink(missing_ok=True)
        old.with_suffix(".jsonl").unlink(missing_ok=True)


def init_logging(
    *,
    base_dir: Path | None = None,
    name: str = "clusterprep",
    verbose: bool = False,
    keep: int = 20,
) -> RunLog:
    """
    Attach a per-run DEBUG file handler and a console handler (INFO, or DEBUG
    when *verbose*) to the *name* logger. Only the newest *keep* runs are
    kept in *base_dir*; older ``.log``/``.jsonl`` pairs are removed.
    """
    base_dir = base_dir or DEFAULT_LOG_DIR
    base_dir.mkdir(parents=True, exist_ok=True)
    _prune(base_dir, name, max(keep - 1, 0))

    run_id = str(uuid.uuid4())
    ts = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
    log_path = base_dir / f"{name}-{ts}-{run_id}.log"

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    for h in list(logger.handlers):
        h.close()
        logger.removeHandler(h)
    logger.propagate = False

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    for handler, level in (
        (logging.FileHandler(log_path), logging.DEBUG),
        (logging.StreamHandler(), logging.DEBUG if verbose else logging.INFO),
    ):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("run_id=%s log_file=%s", run_id, log_path)
    return RunLog(logger=logger, run_id=run_id, log_path=log_path, events_path=log_path.with_suffix(".jsonl"))
