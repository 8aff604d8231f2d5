"""Validation groups: select which tagged registrations run."""
from __future__ import annotations

from typing import Hashable, Iterable


class GroupValidator:
    """The set of groups active for one validation run.

    An empty selector is unrestricted: every registration runs. Otherwise
    untagged registrations always run and tagged ones run when any of their
    groups is active.
    """

    __slots__ = ("active_groups",)

    def __init__(self, *groups: Hashable):
        self.active_groups = frozenset(groups)

    def is_group_active(self, group: Hashable) -> bool:
        return group in self.active_groups

    def selects(self, groups: Iterable[Hashable]) -> bool:
        groups = frozenset(groups)
        if not self.active_groups or not groups:
            return True
        return not groups.isdisjoint(self.active_groups)
