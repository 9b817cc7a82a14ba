# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clusterprep/preflight/kubeconfig.py
from __future__ import annotations

import logging
import os
import posixpath
import re
import tempfile
from pathlib import Path
from typing import Any, Optional

import yaml

from clusterprep.errors import ValidationError

log = logging.getLogger("clusterprep")

CMD_PATH_KEY = "cmd-path"
KUBECONFIG_MODE = 0o600

# e.g. C:\google-cloud-sdk\bin\gcloud.cmd from a kubeconfig generated on Windows
_WINDOWS_PATH = re.compile(r"^[A-Za-z]:[\\/]")


def executable_name(cmd_path: str) -> str:
    """
    Trailing path segment of *cmd_path*, ignoring trailing separators.

    Backslashes are only treated as separators for drive-letter paths; on
    POSIX they are legal filename characters. A value with no segment at
    all (``""``, ``"/"``) is returned unchanged.
    """
    path = cmd_path.replace("\\", "/") if _WINDOWS_PATH.match(cmd_path) else cmd_path
    base = posixpath.basename(path.rstrip("/"))
    return base or cmd_path


def _mapping(value: Any, where: str) -> dict:
    if not isinstance(value, dict):
        raise ValidationError(f"{where} must be a mapping, got {type(value).__name__}")
    return value


def patch_command_path(kubeconfig: dict) -> dict:
    """
    Rewrite every ``auth-provider.config.cmd-path`` to its bare executable name.

    ``/usr/local/bin/gcloud`` becomes ``gcloud`` so the auth plugin is resolved
    from PATH when the kubeconfig is used somewhere other than where it was
    generated. The document is mutated in place and returned. Users without an
    auth-provider, or without a cmd-path, are left alone.
    """
    _mapping(kubeconfig, "kubeconfig")

    users = kubeconfig.get("users")
    if users is None:
        return kubeconfig
    if not isinstance(users, list):
        raise ValidationError(f"kubeconfig 'users' must be a list, got {type(users).__name__}")

    for idx, entry in enumerate(users):
        entry = _mapping(entry, f"users[{idx}]")
        user = entry.get("user")
        if user is None:
            continue
        user = _mapping(user, f"users[{idx}].user")

        provider = user.get("auth-provider")
        if not provider:
            continue
        provider = _mapping(provider, f"users[{idx}].user.auth-provider")

        config = provider.get("config")
        if config is None:
            continue
        config = _mapping(config, f"users[{idx}].user.auth-provider.config")

        if CMD_PATH_KEY not in config:
            continue
        cmd_path = config[CMD_PATH_KEY]
        if not isinstance(cmd_path, str):
            raise ValidationError(
                f"users[{idx}].user.auth-provider.config.{CMD_PATH_KEY} must be a string"
            )

        base = executable_name(cmd_path)
        if base != cmd_path:
            log.debug(
                "[kubeconfig] user=%s %s: %s -> %s",
                entry.get("name"), CMD_PATH_KEY, cmd_path, base,
            )
        config[CMD_PATH_KEY] = base

    return kubeconfig


def load_kubeconfig(path: str | Path) -> dict:
    path = Path(path)
    if not path.is_file():
        raise ValidationError(f"kubeconfig not found: {path}")
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ValidationError(f"kubeconfig {path} is not valid YAML: {e}") from e
    return data if data is not None else {}


def patch_kubeconfig_file(src: str | Path, dest: Optional[str | Path] = None) -> Path:
    """
    Load a kubeconfig file, patch its auth-provider command paths and write it
    to *dest* (or back to *src*). Returns the path written.

    The file holds credentials: it is written owner-only (0600) via a temp
    file in the same directory, then renamed over the target, so an
    interrupted in-place patch never leaves a truncated kubeconfig.
    """
    src = Path(src)
    data = patch_command_path(load_kubeconfig(src))

    out = Path(dest) if dest else src
    out.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        mode="w", dir=out.parent, prefix=f".{out.name}.", suffix=".tmp", delete=False
    ) as tmp:
        tmp_path = tmp.name
        try:
            yaml.safe_dump(data, tmp, sort_keys=False, default_flow_style=False)
        except BaseException:
            tmp.close()
            os.unlink(tmp_path)
            raise

    try:
        os.chmod(tmp_path, KUBECONFIG_MODE)
        os.replace(tmp_path, out)
    except OSError:
        os.unlink(tmp_path)
        raise
    log.info("[kubeconfig] wrote patched kubeconfig to %s", out)
    return out
