"""Builders for test custom resources and their definitions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class GroupVersionKind:
    """Identifies a Kubernetes resource type."""

    group: str
    version: str
    kind: str

    def api_version(self) -> str:
        """Return the ``apiVersion`` string for this group and version."""
        if not self.group:
            return self.version
        return f"{self.group}/{self.version}"


def build_test_crd(gvk: GroupVersionKind) -> dict[str, Any]:
    """Build a namespaced CustomResourceDefinition manifest for ``gvk``."""
    singular = gvk.kind.lower()
    plural = f"{singular}s"
    return {
        "apiVersion": "apiextensions.k8s.io/v1",
        "kind": "CustomResourceDefinition",
        "metadata": {"name": f"{plural}.{gvk.group}"},
        "spec": {
            "group": gvk.group,
            "names": {
                "kind": gvk.kind,
                "listKind": f"{gvk.kind}List",
                "singular": singular,
                "plural": plural,
            },
            "scope": "Namespaced",
            "versions": [
                {
                    "name": "v1",
                    "schema": {
                        "openAPIV3Schema": {
                            "type": "object",
                            "x-kubernetes-preserve-unknown-fields": True,
                        }
                    },
                    "subresources": {"status": {}},
                    "served": True,
                    "storage": True,
                }
            ],
        },
    }


def build_test_cr(gvk: GroupVersionKind) -> dict[str, Any]:
    """Build a test custom resource of type ``gvk``."""
    return {
        "apiVersion": gvk.api_version(),
        "kind": gvk.kind,
        "metadata": {
            "name": "test",
            "namespace": "default",
            "uid": "test-uid",
            "annotations": {
                "helm.sdk.operatorframework.io/install-description": "test install description",
                "helm.sdk.operatorframework.io/upgrade-description": "test upgrade description",
                "helm.sdk.operatorframework.io/uninstall-description": "test uninstall description",
            },
        },
        "spec": {"replicas": 2},
    }