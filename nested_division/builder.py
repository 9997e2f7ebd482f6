"""
Assemble the division forest from the four flat record collections.

Parentage is implicit in the codes: each record is attached to the node
whose code matches its own code's prefix one level up. Levels are built
strictly top-down (provinces, cities, areas, streets) so every lookup
table is complete before the level below it is attached.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .codes import HierarchyKey, parse_key
from .errors import DuplicateCodeError, MalformedCodeError, OrphanRecordError
from .loader import RecordStore
from .models import ROOT_PARENT_CODE, Area, FlatRecord, Level

LOG = logging.getLogger("nested_division.builder")


class TreeBuilder:
    """
    Build an ordered forest of province roots.

    Sibling order at every level is the relative order of the records in
    their input collection. Lookup tables map a normalized code to the
    node that owns it, so lower levels attach without rescanning.

    Usage::

        forest = TreeBuilder().build(store)
    """

    def __init__(self) -> None:
        self._nodes: dict[Level, dict[str, Area]] = {}

    def build(self, store: RecordStore) -> list[Area]:
        """
        Build the forest for a record store.

        Raises:
            MalformedCodeError: A code is too short for its level.
            OrphanRecordError: A record's parent is not in the level above.
            DuplicateCodeError: A code repeats within one level.
        """
        self._nodes = {level: {} for level in Level}

        forest: list[Area] = []
        for record in store.provinces:
            key = parse_key(record.code, Level.PROVINCE)
            node = Area(code=record.code, name=record.name, parent_code=ROOT_PARENT_CODE)
            self._register(Level.PROVINCE, key, node)
            forest.append(node)

        self._attach(Level.CITY, store.cities)
        self._attach(Level.AREA, store.areas)
        self._attach(Level.STREET, store.streets)

        LOG.info(
            "Built forest: %d provinces, %d cities, %d areas, %d streets",
            *(len(self._nodes[level]) for level in Level),
        )
        return forest

    def lookup(self, level: Level, code: str) -> Area | None:
        """Node registered for ``code`` at ``level`` by the last build."""
        table = self._nodes.get(level, {})
        return table.get(parse_key(code, level).own_code)

    def _attach(self, level: Level, records: Iterable[FlatRecord]) -> None:
        parents = self._nodes[Level(level - 1)]
        for record in records:
            key = parse_key(record.code, level)
            parent_code = key.parent_code()
            parent = parents.get(parent_code)
            if parent is None:
                raise OrphanRecordError(
                    f"{level.name.lower()} {record.code!r} ({record.name}) has no "
                    f"{Level(level - 1).name.lower()} {parent_code!r}",
                    code=record.code,
                )

            declared = record.parent_code
            if not declared.isdigit():
                raise MalformedCodeError(
                    f"{level.name.lower()} {record.code!r} has non-numeric parent code {declared!r}",
                    code=record.code,
                )
            if declared == ROOT_PARENT_CODE:
                declared = parent.code
            elif declared not in (parent.code, parent_code):
                LOG.warning(
                    "%s %s declares parent %s but its code places it under %s",
                    level.name.lower(), record.code, declared, parent.code,
                )

            node = Area(code=record.code, name=record.name, parent_code=declared)
            self._register(level, key, node)
            parent.children.append(node)

    def _register(self, level: Level, key: HierarchyKey, node: Area) -> None:
        table = self._nodes[level]
        code = key.own_code
        if code in table:
            raise DuplicateCodeError(
                f"{level.name.lower()} code {node.code!r} appears more than once",
                code=node.code,
            )
        table[code] = node


def build_forest(store: RecordStore) -> list[Area]:
    """Convenience wrapper: ``TreeBuilder().build(store)``."""
    return TreeBuilder().build(store)
