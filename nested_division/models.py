"""
Data models for the division hierarchy.

FlatRecord is the wire shape of a dataset entry and is validated with
pydantic. Area and NestedRow are plain dataclasses: Area is mutated in
place by the builder and the indexer, NestedRow is the emitted record.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import IntEnum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

# Parent code carried by province records.
ROOT_PARENT_CODE = "0"


class Level(IntEnum):
    """Administrative level; the value is the nested-set depth."""

    PROVINCE = 1
    CITY = 2
    AREA = 3
    STREET = 4


class FlatRecord(BaseModel):
    """One entry of a dataset file."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    code: str
    name: str
    parent_code: str = Field(
        default=ROOT_PARENT_CODE,
        validation_alias=AliasChoices("parent_code", "parentCode"),
    )


@dataclass
class Area:
    """
    Node of the division forest.

    The name is historical: an Area is a node at any of the four levels.
    left/right/depth stay 0 until the forest has been indexed.
    """

    code: str
    name: str
    parent_code: str
    left: int = 0
    right: int = 0
    depth: int = 0
    children: list[Area] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return len(self.children) == 0

    @property
    def is_indexed(self) -> bool:
        return self.left > 0 and self.right > self.left

    def walk(self) -> Iterator[Area]:
        """Pre-order traversal of this subtree, self first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def contains(self, other: Area) -> bool:
        """True if other is a strict descendant, by range comparison alone."""
        return self.left < other.left and other.right < self.right


@dataclass(frozen=True)
class NestedRow:
    """One emitted row of the nested-set table."""

    code: str
    name: str
    parent_code: str
    depth: int
    left: int
    right: int

    @classmethod
    def from_area(cls, area: Area) -> NestedRow:
        return cls(
            code=area.code,
            name=area.name,
            parent_code=area.parent_code,
            depth=area.depth,
            left=area.left,
            right=area.right,
        )

    def as_tuple(self) -> tuple[str, str, str, int, int, int]:
        return (self.code, self.name, self.parent_code, self.depth, self.left, self.right)
