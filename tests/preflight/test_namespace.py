from dataclasses import dataclass
from typing import List, Optional

import pytest
from kubernetes.client import V1Namespace, V1ObjectMeta
from kubernetes.client.rest import ApiException
from urllib3.exceptions import MaxRetryError

from clusterprep.errors import ClusterTransportError, NamespaceNotFound, ValidationError
from clusterprep.preflight.namespace import KubernetesNamespaces, Namespace, ensure_namespace


# --------- Test doubles ----------

@dataclass
class Call:
    op: str
    args: tuple


class FakeNamespaces:
    """Scripted namespace store; `get_error` overrides lookups for every name."""
    def __init__(self, existing=(), get_error: Optional[Exception] = None):
        self.existing = set(existing)
        self.get_error = get_error
        self.calls: List[Call] = []

    def get(self, name):
        self.calls.append(Call("get", (name,)))
        if self.get_error is not None:
            raise self.get_error
        if name not in self.existing:
            raise NamespaceNotFound(name)
        return Namespace(name=name)

    def create(self, namespace):
        self.calls.append(Call("create", (namespace,)))
        self.existing.add(namespace.name)
        return namespace

    def creates(self):
        return [c for c in self.calls if c.op == "create"]


class FakeCoreV1:
    def __init__(self, read_exc=None, create_exc=None):
        self.read_exc = read_exc
        self.create_exc = create_exc
        self.created = []

    def read_namespace(self, name):
        if self.read_exc:
            raise self.read_exc
        return V1Namespace(metadata=V1ObjectMeta(name=name))

    def create_namespace(self, body):
        self.created.append(body)
        if self.create_exc:
            raise self.create_exc
        return body


# --------- ensure_namespace ----------

def test_existing_namespace_is_not_created():
    ns = FakeNamespaces(existing={"existing"})
    assert ensure_namespace(ns, "existing") is False
    assert ns.creates() == []


def test_missing_namespace_is_created_once():
    ns = FakeNamespaces()
    assert ensure_namespace(ns, "new") is True
    assert ns.creates() == [Call("create", (Namespace(name="new"),))]


def test_second_call_does_not_create_again():
    ns = FakeNamespaces()
    ensure_namespace(ns, "new")
    ensure_namespace(ns, "new")
    assert len(ns.creates()) == 1


def test_transport_error_propagates_without_create():
    err = ClusterTransportError("unauthorized", status=401)
    ns = FakeNamespaces(get_error=err)

    with pytest.raises(ClusterTransportError) as exc_info:
        ensure_namespace(ns, "new")

    assert exc_info.value is err
    assert ns.creates() == []


def test_empty_name_rejected_before_any_call():
    ns = FakeNamespaces()
    with pytest.raises(ValidationError):
        ensure_namespace(ns, "")
    assert ns.calls == []


# --------- KubernetesNamespaces ----------

def test_k8s_get_found():
    assert KubernetesNamespaces(FakeCoreV1()).get("kubeflow") == Namespace(name="kubeflow")


def test_k8s_get_404_is_not_found():
    core = FakeCoreV1(read_exc=ApiException(status=404, reason="Not Found"))
    with pytest.raises(NamespaceNotFound):
        KubernetesNamespaces(core).get("kubeflow")


def test_k8s_get_other_status_is_transport_error():
    core = FakeCoreV1(read_exc=ApiException(status=403, reason="Forbidden"))
    with pytest.raises(ClusterTransportError) as exc_info:
        KubernetesNamespaces(core).get("kubeflow")
    assert exc_info.value.status == 403


def test_k8s_get_connection_failure_is_transport_error():
    core = FakeCoreV1(read_exc=MaxRetryError(pool=None, url="/api/v1/namespaces/kubeflow"))
    with pytest.raises(ClusterTransportError):
        KubernetesNamespaces(core).get("kubeflow")


def test_k8s_create_sends_namespace_body():
    core = FakeCoreV1()
    KubernetesNamespaces(core).create(Namespace(name="new"))
    assert core.created[0].metadata.name == "new"


def test_k8s_create_409_is_success():
    core = FakeCoreV1(create_exc=ApiException(status=409, reason="AlreadyExists"))
    assert KubernetesNamespaces(core).create(Namespace(name="new")) == Namespace(name="new")


def test_k8s_create_other_error_raises():
    core = FakeCoreV1(create_exc=ApiException(status=500, reason="Internal"))
    with pytest.raises(ClusterTransportError):
        KubernetesNamespaces(core).create(Namespace(name="new"))


def test_ensure_namespace_over_k8s_client_creates_on_404():
    core = FakeCoreV1(read_exc=ApiException(status=404, reason="Not Found"))
    assert ensure_namespace(KubernetesNamespaces(core), "new") is True
    assert [b.metadata.name for b in core.created] == ["new"]
