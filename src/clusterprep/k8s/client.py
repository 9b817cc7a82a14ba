# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clusterprep/k8s/client.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from kubernetes import client, config
from kubernetes.client.rest import ApiException
from kubernetes.config.config_exception import ConfigException
from kubernetes.config.kube_config import ENV_KUBECONFIG_PATH_SEPARATOR, KUBE_CONFIG_DEFAULT_LOCATION
from urllib3.exceptions import HTTPError

from clusterprep.errors import ClusterTransportError, ValidationError
from clusterprep.preflight.namespace import KubernetesNamespaces, NamespaceClient

log = logging.getLogger("clusterprep")


@dataclass
class ClusterApis:
    """The handful of cluster calls the pre-flight sequence needs."""

    version_api: Any
    storage_api: Any
    namespaces: NamespaceClient

    def version(self) -> Any:
        try:
            return self.version_api.get_code()
        except (ApiException, HTTPError) as e:
            raise ClusterTransportError(
                f"querying cluster version failed: {e}", status=getattr(e, "status", None)
            ) from e

    def storage_classes(self) -> Any:
        try:
            return self.storage_api.list_storage_class()
        except (ApiException, HTTPError) as e:
            raise ClusterTransportError(
                f"listing storage classes failed: {e}", status=getattr(e, "status", None)
            ) from e


def kubeconfig_location() -> str:
    """
    Kubeconfig location the kubernetes client falls back to: $KUBECONFIG
    (read at call time, may be a path list) or ~/.kube/config.
    """
    return os.environ.get("KUBECONFIG") or KUBE_CONFIG_DEFAULT_LOCATION


def default_kubeconfig() -> Path:
    """First file of kubeconfig_location(); kubectl writes changes there too."""
    first = kubeconfig_location().split(ENV_KUBECONFIG_PATH_SEPARATOR)[0]
    return Path(os.path.expanduser(first))


def connect(kubeconfig: Optional[str | Path] = None, kube_context: Optional[str] = None) -> ClusterApis:
    """
    Build API clients from a kubeconfig file (default location when None).

    Args:
        kubeconfig: path to kubeconfig
        kube_context: optional kube context to select
    """
    config_file = str(kubeconfig) if kubeconfig else kubeconfig_location()
    log.debug("[k8s] loading kubeconfig=%s context=%s", config_file, kube_context)
    try:
        api_client = config.new_client_from_config(config_file=config_file, context=kube_context)
    except ConfigException as e:
        raise ValidationError(f"cannot load kubeconfig {config_file}: {e}") from e
    return ClusterApis(
        version_api=client.VersionApi(api_client),
        storage_api=client.StorageV1Api(api_client),
        namespaces=KubernetesNamespaces(client.CoreV1Api(api_client)),
    )
