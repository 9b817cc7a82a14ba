# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clusterprep/preflight/storage.py
from __future__ import annotations

from typing import Any, Iterable

DEFAULT_CLASS_KEY = "storageclass.beta.kubernetes.io/is-default-class"


def _items(storage_classes: Any) -> Iterable[Any]:
    if storage_classes is None:
        return []
    if isinstance(storage_classes, dict):
        return storage_classes.get("items") or []
    items = getattr(storage_classes, "items", None)
    if items is not None and not callable(items):
        return items
    return storage_classes


def _parameters(sc: Any) -> dict:
    if isinstance(sc, dict):
        params = sc.get("parameters")
    else:
        params = getattr(sc, "parameters", None)
    return params if isinstance(params, dict) else {}


def has_default_storage_class(storage_classes: Any) -> bool:
    """
    True when any storage class carries the default-class key in its parameters.

    Only the presence of the key is checked, not its value: a class with
    ``"false"`` still counts.
    """
    return any(DEFAULT_CLASS_KEY in _parameters(sc) for sc in _items(storage_classes))
