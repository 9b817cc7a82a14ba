# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clusterprep/config/loader.py

import logging
import os
import yaml
from pathlib import Path
from .models import PreflightConfig

log = logging.getLogger("clusterprep")


def _load_yaml(path: Path) -> dict:
    """Load a YAML file, expanding ${ENV_VAR} references."""
    raw = path.read_text()
    expanded = os.path.expandvars(raw)
    return yaml.safe_load(expanded) or {}


def load_config(path: str | Path) -> PreflightConfig:
    """
    Load and validate a pre-flight YAML config.

    ``${ENV_VAR}`` placeholders are resolved with ``os.path.expandvars`` at
    load time, so a config can point at e.g. ``${HOME}/.kube/config``.
    Relative ``kubeconfig`` / ``patched_kubeconfig`` paths are resolved
    against the config file's directory.
    """
    path = Path(path)
    data = _load_yaml(path)
    log.debug("Loaded pre-flight config from %s", path)

    cfg = PreflightConfig.model_validate(data)
    for field in ("kubeconfig", "patched_kubeconfig"):
        value = getattr(cfg, field)
        if value is not None and not value.is_absolute():
            setattr(cfg, field, path.parent / value)
    return cfg
