# src/trackprop/propagator/lists.py
"""
Ordered composition of step hooks.

An ``ActionList`` holds step observers invoked as ``action(cache, result)``
after every stepper advance. An ``AbortList`` holds predicates invoked as
``condition(result, cache) -> bool``; the list fires on the first member
that returns True and never evaluates the members after it.

Both lists are fixed at construction. Members may be instances of step-hook
classes or plain functions and lambdas; several members may share a type,
and ``get(T)`` returns the first one. Every result type an action declares
via its ``result_type`` class attribute must be distinct. A clash raises
``DuplicateResultError`` here, never inside the step loop.
"""
from __future__ import annotations

from collections import Counter
from typing import Any, Iterator, Optional, Protocol, Tuple, TypeVar

from trackprop.errors import DuplicateResultError

__all__ = ["Action", "AbortCondition", "ActionList", "AbortList"]

M = TypeVar("M")


class Action(Protocol):
    """
    Step observer. May read/advance the current cache state and write into
    its own result slot (``result.get(self.result_type)``).

    Declare ``result_type = SomeClass`` (default-constructible) to request a
    slot in the Result; leave it as None otherwise.
    """

    def __call__(self, cache: Any, result: Any) -> None: ...


class AbortCondition(Protocol):
    """
    Stop predicate. Returns True to request the end of the step loop.
    May shrink ``cache.step_size`` but must not touch the path state.
    """

    def __call__(self, result: Any, cache: Any) -> bool: ...


class _MemberList:
    """Shared storage/lookup for the two list kinds."""

    _kind = "member"

    def __init__(self, *members: Any):
        for member in members:
            if not callable(member):
                raise TypeError(
                    f"{self._kind} {member!r} is not callable; "
                    f"{type(self).__name__} members must implement __call__"
                )
        self._members: Tuple[Any, ...] = tuple(members)

    @property
    def members(self) -> Tuple[Any, ...]:
        return self._members

    def get(self, member_type: type[M]) -> M:
        """Return the first configured member of exactly ``member_type``."""
        for member in self._members:
            if type(member) is member_type:
                return member
        raise KeyError(f"{type(self).__name__} has no member of type {member_type.__name__}")

    def __contains__(self, member_type: object) -> bool:
        return any(type(m) is member_type for m in self._members)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def __repr__(self) -> str:
        names = ", ".join(type(m).__name__ for m in self._members)
        return f"{type(self).__name__}({names})"


class ActionList(_MemberList):
    """Ordered list of actions; every member runs once per step, in order."""

    _kind = "action"

    def __init__(self, *actions: Action):
        super().__init__(*actions)
        declared = [t for t in (getattr(a, "result_type", None) for a in self._members) if t is not None]
        for t in declared:
            if not isinstance(t, type):
                raise TypeError(f"result_type must be a class, got {t!r}")
        counts = Counter(declared)
        dupes = [t.__name__ for t, n in counts.items() if n > 1]
        if dupes:
            raise DuplicateResultError("action result types", dupes)
        self._result_types: Tuple[type, ...] = tuple(declared)

    @property
    def result_types(self) -> Tuple[type, ...]:
        """Extension slots the Result must carry, in declaration order."""
        return self._result_types

    def __call__(self, cache: Any, result: Any) -> None:
        for action in self._members:
            action(cache, result)


class AbortList(_MemberList):
    """Ordered list of abort conditions combined with short-circuit OR."""

    _kind = "abort condition"

    def __init__(self, *conditions: AbortCondition):
        super().__init__(*conditions)

    def first_fired(self, result: Any, cache: Any) -> Optional[Any]:
        """Return the first member that fires, or None. Later members are skipped."""
        for condition in self._members:
            if condition(result, cache):
                return condition
        return None

    def __call__(self, result: Any, cache: Any) -> bool:
        return self.first_fired(result, cache) is not None
