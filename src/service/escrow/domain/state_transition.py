"""
Closed status transition tables

Every entity status change goes through `StatusTransition.check`, which only
accepts the (from, to) pairs listed for that entity.
"""

from collections.abc import Mapping
from enum import StrEnum
from typing import Generic, TypeVar

from src.platform.exception.exceptions import InvalidStateError


S = TypeVar('S', bound=StrEnum)


class StatusTransition(Generic[S]):
    def __init__(self, entity_name: str, allowed: Mapping[S, frozenset[S]]) -> None:
        self.entity_name = entity_name
        self._allowed = dict(allowed)

    def can(self, current: S, target: S) -> bool:
        return target in self._allowed.get(current, frozenset())

    def check(self, current: S, target: S) -> S:
        if not self.can(current, target):
            raise InvalidStateError(
                f'{self.entity_name} cannot transition from {current.value} to {target.value}'
            )
        return target

    def is_terminal(self, status: S) -> bool:
        return not self._allowed.get(status)
