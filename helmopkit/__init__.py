"""Building blocks for Helm-style Kubernetes operators: conditions, namespaces, predicates."""

__version__ = "0.1.0"
__all__ = ["conditions", "fake", "manifestutil", "namespace", "predicates", "testutil"]