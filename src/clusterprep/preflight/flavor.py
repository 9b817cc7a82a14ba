# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clusterprep/preflight/flavor.py
from __future__ import annotations

from typing import Any

GKE_MARKER = "gke"


def git_version(version_info: Any) -> str:
    """Return the gitVersion string from a VersionInfo object or a plain mapping."""
    if version_info is None:
        return ""
    if isinstance(version_info, dict):
        value = version_info.get("gitVersion", version_info.get("git_version"))
    else:
        value = getattr(version_info, "git_version", None)
    return value if isinstance(value, str) else ""


def is_gke(version_info: Any) -> bool:
    # Plain substring match, e.g. "v1.9.0-gke.3"
    return GKE_MARKER in git_version(version_info)
