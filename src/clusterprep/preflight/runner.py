# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clusterprep/preflight/runner.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from clusterprep.config.models import PreflightConfig
from clusterprep.errors import PreflightError
from clusterprep.k8s.client import ClusterApis, default_kubeconfig
from clusterprep.observers.dispatcher import EventBus
from clusterprep.observers.events import (
    new_ctx,
    PreflightStarted,
    FlavorDetected,
    NamespaceEnsured,
    StorageClassChecked,
    KubeconfigPatched,
    PreflightFailed,
    PreflightSummary,
)
from .flavor import git_version, is_gke
from .kubeconfig import patch_kubeconfig_file
from .namespace import ensure_namespace
from .storage import has_default_storage_class

log = logging.getLogger("clusterprep")


@dataclass
class PreflightReport:
    gke: bool = False
    namespace_created: bool = False
    has_default_storage: bool = False
    kubeconfig_path: Optional[Path] = None
    warnings: List[str] = field(default_factory=list)

    def summary(self) -> str:
        return (
            f"gke={self.gke} namespace_created={self.namespace_created} "
            f"default_storage={self.has_default_storage} warnings={len(self.warnings)}"
        )


def run_preflight(
    cfg: PreflightConfig,
    cluster: ClusterApis,
    observers: Optional[List] = None,
    run_id: Optional[str] = None,
) -> PreflightReport:
    """
    Run the pre-flight sequence against *cluster*:
    flavor -> namespace -> storage class -> (optional) kubeconfig patch.

    Any error aborts the run; a PreflightFailed event is emitted and the
    error is re-raised unchanged. Nothing is retried here.
    """
    bus = EventBus(observers or [])
    run_ctx = new_ctx(env=cfg.environment, context=cfg.context, run_id=run_id)
    report = PreflightReport()
    stage = "flavor"

    bus.emit(PreflightStarted(namespace=cfg.namespace, **run_ctx))
    try:
        # 1) Flavor
        version = cluster.version()
        report.gke = is_gke(version)
        bus.emit(FlavorDetected(git_version=git_version(version), gke=report.gke, **run_ctx))

        # 2) Namespace
        stage = "namespace"
        report.namespace_created = ensure_namespace(cluster.namespaces, cfg.namespace)
        bus.emit(NamespaceEnsured(namespace=cfg.namespace, created=report.namespace_created, **run_ctx))

        # 3) Default storage class
        stage = "storage"
        report.has_default_storage = has_default_storage_class(cluster.storage_classes())
        bus.emit(StorageClassChecked(has_default=report.has_default_storage, **run_ctx))
        if not report.has_default_storage:
            if cfg.require_default_storage_class:
                raise PreflightError("cluster has no default storage class")
            msg = "no default storage class; workloads needing PVCs must name a class"
            if report.gke:
                msg += " (GKE normally provides 'standard')"
            log.warning(msg)
            report.warnings.append(msg)

        # 4) Kubeconfig
        if cfg.patch_kubeconfig:
            stage = "kubeconfig"
            src = cfg.kubeconfig or default_kubeconfig()
            report.kubeconfig_path = patch_kubeconfig_file(src, cfg.patched_kubeconfig)
            bus.emit(KubeconfigPatched(path=str(report.kubeconfig_path), **run_ctx))
    except Exception as e:
        log.error("pre-flight failed at stage=%s: %s", stage, e)
        bus.emit(PreflightFailed(stage=stage, error=str(e), **run_ctx))
        bus.emit(PreflightSummary(status="FAILED", warnings=len(report.warnings), **run_ctx))
        raise

    bus.emit(PreflightSummary(status="OK", warnings=len(report.warnings), **run_ctx))
    log.info("pre-flight complete: %s", report.summary())
    return report
