# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clusterprep/config/models.py

from pathlib import Path
from typing import Literal, Optional
from pydantic import BaseModel, Field


class PreflightConfig(BaseModel):
    context: Optional[str] = None              # Kubernetes context to use
    kubeconfig: Optional[Path] = None          # None -> default kubeconfig location
    namespace: str = Field(default="kubeflow", min_length=1)
    environment: Literal["dev", "staging", "prod"] = "dev"

    # Fail the run instead of warning when no default storage class exists
    require_default_storage_class: bool = False

    # Rewrite auth-provider cmd-path entries for non-interactive use
    patch_kubeconfig: bool = False
    patched_kubeconfig: Optional[Path] = None  # None -> patch in place
