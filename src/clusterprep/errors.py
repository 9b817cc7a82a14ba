# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clusterprep/errors.py
from __future__ import annotations

from typing import Optional


class PreflightError(RuntimeError):
    """Base class for cluster pre-flight failures."""


class ValidationError(PreflightError):
    """Raised when an input (e.g. a kubeconfig document) cannot be traversed."""


class NamespaceNotFound(PreflightError):
    """Raised by a namespace lookup when the namespace does not exist."""

    def __init__(self, name: str):
        super().__init__(f"namespace '{name}' not found")
        self.name = name


class ClusterTransportError(PreflightError):
    """Any other failure talking to the cluster (auth, network, server error)."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status
