# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clusterprep/observers/dispatcher.py
from __future__ import annotations

import logging
from typing import List, Optional, Protocol
from .events import BaseEvent

log = logging.getLogger("clusterprep")


class Observer(Protocol):
    def notify(self, event: BaseEvent) -> None: ...


class EventBus:
    def __init__(self, observers: Optional[List[Observer]] = None):
        self._observers = observers or []

    def emit(self, event: BaseEvent) -> None:
        for ob in self._observers:
            try:
                ob.notify(event)
            except Exception:
                # observers must not break a pre-flight run
                log.debug("observer %r failed on %s", ob, event.__class__.__name__, exc_info=True)
