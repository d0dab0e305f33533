"""Event filters for watches on dependent resources."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

Object = Mapping[str, Any]
ObjectFilter = Callable[[Object], bool]
UpdateFilter = Callable[[Object, Object], bool]

_log = logging.getLogger(__name__)


def _describe(obj: Object) -> dict[str, str]:
    metadata = obj.get("metadata") or {}
    return {
        "name": metadata.get("name", ""),
        "namespace": metadata.get("namespace", ""),
        "apiVersion": obj.get("apiVersion", ""),
        "kind": obj.get("kind", ""),
    }


@dataclass
class PredicateFuncs:
    """A predicate built from optional per-event functions.

    An event whose function is not set is let through.
    """

    create_func: Optional[ObjectFilter] = None
    delete_func: Optional[ObjectFilter] = None
    update_func: Optional[UpdateFilter] = None
    generic_func: Optional[ObjectFilter] = None

    def create(self, obj: Object) -> bool:
        return self.create_func(obj) if self.create_func is not None else True

    def delete(self, obj: Object) -> bool:
        return self.delete_func(obj) if self.delete_func is not None else True

    def update(self, old: Object, new: Object) -> bool:
        return self.update_func(old, new) if self.update_func is not None else True

    def generic(self, obj: Object) -> bool:
        return self.generic_func(obj) if self.generic_func is not None else True


class GenerationChangedPredicate(PredicateFuncs):
    """Lets an update through only when ``metadata.generation`` changed."""

    def update(self, old: Object, new: Object) -> bool:
        if old is None:
            _log.error("update event has no old object to update")
            return False
        if new is None:
            _log.error("update event has no new object for update")
            return False
        old_generation = (old.get("metadata") or {}).get("generation")
        new_generation = (new.get("metadata") or {}).get("generation")
        return new_generation != old_generation


def _without_volatile_fields(obj: Object) -> dict[str, Any]:
    stripped = copy.deepcopy(dict(obj))
    stripped.pop("status", None)
    metadata = stripped.get("metadata")
    if isinstance(metadata, dict):
        metadata.pop("resourceVersion", None)
    return stripped


def _dependent_create(obj: Object) -> bool:
    # Dependents are only created during reconciliation; another pass is redundant.
    _log.debug("Skipping reconciliation for dependent resource creation %s", _describe(obj))
    return False


def _dependent_delete(obj: Object) -> bool:
    _log.debug("Reconciling due to dependent resource deletion %s", _describe(obj))
    return True


def _dependent_generic(obj: Object) -> bool:
    _log.debug("Skipping reconcile due to generic event %s", _describe(obj))
    return False


def _dependent_update(old: Object, new: Object) -> bool:
    if _without_volatile_fields(old) == _without_volatile_fields(new):
        return False
    _log.debug("Reconciling due to dependent resource update %s", _describe(new))
    return True


def dependent_predicate_funcs() -> PredicateFuncs:
    """Return the predicate used for events on dependent resources.

    Creations and generic events are ignored, deletions always reconcile,
    and updates reconcile unless only the status or resource version changed.
    """
    return PredicateFuncs(
        create_func=_dependent_create,
        delete_func=_dependent_delete,
        update_func=_dependent_update,
        generic_func=_dependent_generic,
    )