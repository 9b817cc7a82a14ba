from pathlib import Path
import textwrap

import pydantic
import pytest

from clusterprep.config.loader import load_config


def test_load_config_minimal_ok(tmp_path: Path):
    f = tmp_path / "preflight.yaml"
    f.write_text("namespace: kubeflow\n")
    cfg = load_config(f)
    assert cfg.namespace == "kubeflow"
    assert cfg.environment == "dev"
    assert cfg.patch_kubeconfig is False
    assert cfg.kubeconfig is None


def test_load_config_expands_env_and_resolves_paths(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("TARGET_NS", "ml-platform")
    cfg_text = textwrap.dedent("""
        context: gke_proj_zone_cluster
        environment: staging
        namespace: ${TARGET_NS}
        kubeconfig: kube/config
        patch_kubeconfig: true
        patched_kubeconfig: /tmp/patched-kubeconfig
    """)
    f = tmp_path / "preflight.yaml"
    f.write_text(cfg_text)

    cfg = load_config(f)
    assert cfg.namespace == "ml-platform"
    assert cfg.context == "gke_proj_zone_cluster"
    assert cfg.kubeconfig == tmp_path / "kube" / "config"
    assert cfg.patched_kubeconfig == Path("/tmp/patched-kubeconfig")


def test_load_config_rejects_empty_namespace(tmp_path: Path):
    f = tmp_path / "preflight.yaml"
    f.write_text('namespace: ""\n')
    with pytest.raises(pydantic.ValidationError):
        load_config(f)


def test_load_config_rejects_unknown_environment(tmp_path: Path):
    f = tmp_path / "preflight.yaml"
    f.write_text("environment: qa\n")
    with pytest.raises(pydantic.ValidationError):
        load_config(f)
