# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clusterprep/preflight/namespace.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from kubernetes import client
from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError

from clusterprep.errors import ClusterTransportError, NamespaceNotFound, ValidationError

log = logging.getLogger("clusterprep")


@dataclass(frozen=True)
class Namespace:
    name: str


class NamespaceClient(Protocol):
    def get(self, name: str) -> Namespace: ...
    def create(self, namespace: Namespace) -> Namespace: ...


class KubernetesNamespaces(NamespaceClient):
    """
    NamespaceClient backed by the kubernetes CoreV1Api.

    - 404 on read   -> NamespaceNotFound
    - 409 on create -> treated as success (someone else created it first)
    - anything else -> ClusterTransportError
    """

    def __init__(self, core_v1: client.CoreV1Api):
        self.core_v1 = core_v1

    def get(self, name: str) -> Namespace:
        try:
            ns = self.core_v1.read_namespace(name=name)
        except ApiException as e:
            if e.status == 404:
                raise NamespaceNotFound(name) from e
            raise ClusterTransportError(
                f"reading namespace '{name}' failed: {e.reason}", status=e.status
            ) from e
        except HTTPError as e:
            raise ClusterTransportError(f"reading namespace '{name}' failed: {e}") from e
        return Namespace(name=ns.metadata.name)

    def create(self, namespace: Namespace) -> Namespace:
        body = client.V1Namespace(metadata=client.V1ObjectMeta(name=namespace.name))
        try:
            self.core_v1.create_namespace(body=body)
        except ApiException as e:
            if e.status == 409:
                log.debug("[namespace] %s already exists (concurrent create)", namespace.name)
                return namespace
            raise ClusterTransportError(
                f"creating namespace '{namespace.name}' failed: {e.reason}", status=e.status
            ) from e
        except HTTPError as e:
            raise ClusterTransportError(f"creating namespace '{namespace.name}' failed: {e}") from e
        return namespace


def ensure_namespace(namespaces: NamespaceClient, name: str) -> bool:
    """
    Make sure namespace *name* exists, creating it only when the lookup says
    it is missing. Returns True if a create was issued.

    Lookup errors other than NamespaceNotFound propagate and no create is
    attempted. The get/create pair is not atomic: two concurrent callers may
    both see the namespace as missing, so the client's create must tolerate
    "already exists" (KubernetesNamespaces does).
    """
    if not name:
        raise ValidationError("namespace name must not be empty")

    try:
        namespaces.get(name)
    except NamespaceNotFound:
        log.info("[namespace] %s not found, creating", name)
        namespaces.create(Namespace(name=name))
        return True

    log.debug("[namespace] %s already present", name)
    return False
