"""Status conditions: typed observations of an object's state."""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Iterable, Iterator, Optional

Clock = Callable[[], datetime]


def _real_clock() -> datetime:
    return datetime.now(timezone.utc)


def _format_time(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    text = value.replace(microsecond=0).isoformat(timespec="seconds")
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


def _parse_time(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


class ConditionStatus(str, Enum):
    """The status of a condition."""

    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"


@dataclass
class Condition:
    """An observation of an object's state."""

    type: str
    status: ConditionStatus
    reason: str = ""
    message: str = ""
    last_transition_time: Optional[datetime] = None

    def is_true(self) -> bool:
        return self.status == ConditionStatus.TRUE

    def is_false(self) -> bool:
        return self.status == ConditionStatus.FALSE

    def is_unknown(self) -> bool:
        return self.status == ConditionStatus.UNKNOWN

    def copy(self) -> "Condition":
        return dataclasses.replace(self)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form; empty reason and message are omitted."""
        data: dict[str, Any] = {
            "type": self.type,
            "status": ConditionStatus(self.status).value,
        }
        if self.reason:
            data["reason"] = self.reason
        if self.message:
            data["message"] = self.message
        data["lastTransitionTime"] = _format_time(self.last_transition_time)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Condition":
        try:
            return cls(
                type=data["type"],
                status=ConditionStatus(data["status"]),
                reason=data.get("reason", ""),
                message=data.get("message", ""),
                last_transition_time=_parse_time(data.get("lastTransitionTime")),
            )
        except KeyError as exc:
            raise ValueError(f"condition is missing field {exc.args[0]!r}") from None


class Conditions:
    """A set of conditions, at most one per condition type."""

    def __init__(self, *args: Condition, clock: Optional[Clock] = None) -> None:
        self.clock: Clock = clock or _real_clock
        self._items: list[Condition] = []
        for condition in args:
            self.set_condition(condition)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Condition]:
        return (c.copy() for c in self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Conditions):
            return NotImplemented
        return self._sorted() == other._sorted()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Conditions({', '.join(repr(c) for c in self._items)})"

    def _sorted(self) -> list[Condition]:
        return sorted(self._items, key=lambda c: c.type)

    def _find(self, condition_type: str) -> Optional[Condition]:
        return next((c for c in self._items if c.type == condition_type), None)

    def set_condition(self, condition: Condition) -> bool:
        """Add or update a condition; return whether anything changed.

        The transition time is kept when the status is unchanged.
        """
        new = condition.copy()
        new.last_transition_time = self.clock()
        for index, existing in enumerate(self._items):
            if existing.type != new.type:
                continue
            if existing.status == new.status:
                new.last_transition_time = existing.last_transition_time
            changed = (
                existing.status != new.status
                or existing.reason != new.reason
                or existing.message != new.message
            )
            self._items[index] = new
            return changed
        self._items.append(new)
        return True

    def get_condition(self, condition_type: str) -> Optional[Condition]:
        """Return a copy of the condition of the given type, or None."""
        found = self._find(condition_type)
        return found.copy() if found is not None else None

    def remove_condition(self, condition_type: str) -> bool:
        """Remove the condition of the given type; return whether it existed."""
        found = self._find(condition_type)
        if found is None:
            return False
        self._items.remove(found)
        return True

    def is_true_for(self, condition_type: str) -> bool:
        found = self._find(condition_type)
        return found.is_true() if found is not None else False

    def is_false_for(self, condition_type: str) -> bool:
        found = self._find(condition_type)
        return found.is_false() if found is not None else False

    def is_unknown_for(self, condition_type: str) -> bool:
        found = self._find(condition_type)
        return found.is_unknown() if found is not None else True

    def to_json(self) -> str:
        """Serialise as a JSON array sorted by condition type."""
        return json.dumps([c.to_dict() for c in self._sorted()])

    @classmethod
    def from_json(cls, data: str | bytes, clock: Optional[Clock] = None) -> "Conditions":
        raw: Iterable[dict[str, Any]] = json.loads(data)
        if not isinstance(raw, list):
            raise ValueError("conditions JSON must be an array")
        conditions = cls(clock=clock)
        conditions._items = [Condition.from_dict(item) for item in raw]
        return conditions