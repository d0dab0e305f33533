# helmopkit

Small, dependency-free building blocks for writing Kubernetes operators that
manage Helm-style releases. Objects are plain Python dictionaries shaped like
Kubernetes manifests.

## What is inside

- `helmopkit.conditions` – `Condition`, `ConditionStatus` and the `Conditions`
  set. `Conditions.set_condition` stamps the condition with the set's clock,
  keeps the previous transition time when the status is unchanged, and returns
  whether the status, reason or message changed. `get_condition`,
  `remove_condition`, `is_true_for`, `is_false_for` and `is_unknown_for` look
  conditions up by type (`is_unknown_for` is true for a missing type).
  `to_json` writes a JSON array sorted by type; `from_json` reads one back.
  A custom clock (any callable returning a `datetime`) can be passed as
  `clock=`.
- `helmopkit.manifestutil` – `has_resource_policy_keep(annotations)` tells
  whether a resource carries the `helm.sh/resource-policy: keep` annotation
  (case and surrounding whitespace are ignored).
- `helmopkit.namespace` – `split_namespaces`, `lookup_watch_namespaces` and
  `configure_watch_namespaces`, which read `WATCH_NAMESPACE` (from
  `os.environ` or a mapping you pass) and fill in a `ManagerOptions`: one
  namespace goes into `namespace`, several go into `cache_namespaces`, and none
  leaves `namespace` as `""` (all namespaces).
- `helmopkit.predicates` – `PredicateFuncs`, a predicate made of optional
  per-event functions; `dependent_predicate_funcs()`, which ignores creations
  and generic events, always lets deletions through, and lets updates through
  unless only `status` or `metadata.resourceVersion` changed; and
  `GenerationChangedPredicate`, which lets updates through only when
  `metadata.generation` changed.
- `helmopkit.testutil` – `GroupVersionKind`, `build_test_crd` and
  `build_test_cr` for building sample custom resource definitions and
  custom resources in tests.
- `helmopkit.fake` – `FakeController` and `WatchCall`, a controller stand-in
  that records watch calls, whether it was started, and reconcile requests.

## Installation

```
pip install helmopkit
```

## Examples

Track conditions on a custom resource:

```python
from helmopkit.conditions import Condition, ConditionStatus, Conditions

conditions = Conditions()
changed = conditions.set_condition(
    Condition(type="Deployed", status=ConditionStatus.TRUE, reason="InstallSuccessful")
)
assert changed
assert conditions.is_true_for("Deployed")
print(conditions.to_json())
```

Configure which namespaces to watch:

```python
import logging
from helmopkit.namespace import ManagerOptions, configure_watch_namespaces

options = ManagerOptions()
configure_watch_namespaces(options, logging.getLogger("setup"), {"WATCH_NAMESPACE": "a, b"})
print(options.cache_namespaces)  # ['a', 'b']
```

Filter dependent-resource events:

```python
from helmopkit.predicates import dependent_predicate_funcs

predicate = dependent_predicate_funcs()
old = {"kind": "ConfigMap", "metadata": {"name": "x", "resourceVersion": "1"}}
new = {"kind": "ConfigMap", "metadata": {"name": "x", "resourceVersion": "2"}}
assert predicate.update(old, new) is False
```

## What it does not do

helmopkit does not talk to a Kubernetes cluster. It has no API client, no
cache, no running controller manager and no command-line program, and it does
not load or render Helm charts. `ManagerOptions` only records which namespaces
should be watched; acting on it is left to the code that runs the manager.

## Running the tests

```
pip install -e ".[test]"
pytest
```