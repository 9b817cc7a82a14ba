# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clusterprep/observers/events.py

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Dict, Any, Optional
from datetime import datetime, timezone
import uuid


# ---------------------------------------------------------------------
# Base context and helper
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class BaseEvent:
    ts: str           # ISO timestamp
    run_id: str       # correlates all events in a single pre-flight run
    env: str          # dev/staging/prod
    context: Optional[str]  # kube-context

    def dict(self) -> Dict[str, Any]:
        return asdict(self)


def new_ctx(env: str, context: Optional[str], run_id: Optional[str] = None) -> Dict[str, Any]:
    return {
        "ts": datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z"),
        "run_id": run_id or str(uuid.uuid4()),
        "env": env,
        "context": context,
    }


# ---------------------------------------------------------------------
# Pre-flight lifecycle
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class PreflightStarted(BaseEvent):
    namespace: str

@dataclass(frozen=True)
class FlavorDetected(BaseEvent):
    git_version: str
    gke: bool

@dataclass(frozen=True)
class NamespaceEnsured(BaseEvent):
    namespace: str
    created: bool

@dataclass(frozen=True)
class StorageClassChecked(BaseEvent):
    has_default: bool

@dataclass(frozen=True)
class KubeconfigPatched(BaseEvent):
    path: str

@dataclass(frozen=True)
class PreflightFailed(BaseEvent):
    stage: str
    error: str

@dataclass(frozen=True)
class PreflightSummary(BaseEvent):
    status: str       # "OK" | "FAILED"
    warnings: int = 0
