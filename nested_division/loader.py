"""
Record store: the four flat record collections, in file order.

Datasets are read from a directory holding ``provinces.json``,
``cities.json``, ``areas.json`` and ``streets.json``, each a JSON array of
``{"code", "name", "parent_code"}`` objects.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from .errors import DatasetLoadError
from .models import FlatRecord, Level

LOG = logging.getLogger("nested_division.loader")

DATA_FILES = {
    Level.PROVINCE: "provinces.json",
    Level.CITY: "cities.json",
    Level.AREA: "areas.json",
    Level.STREET: "streets.json",
}

_RECORDS = TypeAdapter(list[FlatRecord])


@dataclass
class RecordStore:
    """Ordered record collections, one per level."""

    provinces: list[FlatRecord] = field(default_factory=list)
    cities: list[FlatRecord] = field(default_factory=list)
    areas: list[FlatRecord] = field(default_factory=list)
    streets: list[FlatRecord] = field(default_factory=list)

    def records(self, level: Level) -> list[FlatRecord]:
        return {
            Level.PROVINCE: self.provinces,
            Level.CITY: self.cities,
            Level.AREA: self.areas,
            Level.STREET: self.streets,
        }[level]

    def __len__(self) -> int:
        return len(self.provinces) + len(self.cities) + len(self.areas) + len(self.streets)

    @classmethod
    def from_dicts(
        cls,
        provinces: Sequence[dict] = (),
        cities: Sequence[dict] = (),
        areas: Sequence[dict] = (),
        streets: Sequence[dict] = (),
    ) -> RecordStore:
        """Build a store from already parsed mappings."""
        return cls(
            provinces=_RECORDS.validate_python(list(provinces)),
            cities=_RECORDS.validate_python(list(cities)),
            areas=_RECORDS.validate_python(list(areas)),
            streets=_RECORDS.validate_python(list(streets)),
        )


def load_records(path: Path) -> list[FlatRecord]:
    """
    Read one dataset file.

    Raises:
        DatasetLoadError: The file cannot be read or is not a list of records.
    """
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise DatasetLoadError(f"Cannot read {path}: {exc}") from exc

    try:
        records = _RECORDS.validate_json(data)
    except ValidationError as exc:
        raise DatasetLoadError(f"{path} is not a list of division records: {exc}") from exc

    LOG.info("Loaded %d records from %s", len(records), path.name)
    return records


def load_dataset(data_dir: Path) -> RecordStore:
    """Load all four levels from ``data_dir``."""
    data_dir = Path(data_dir)
    if not data_dir.is_dir():
        raise DatasetLoadError(f"Data directory not found: {data_dir}")

    store = RecordStore(
        provinces=load_records(data_dir / DATA_FILES[Level.PROVINCE]),
        cities=load_records(data_dir / DATA_FILES[Level.CITY]),
        areas=load_records(data_dir / DATA_FILES[Level.AREA]),
        streets=load_records(data_dir / DATA_FILES[Level.STREET]),
    )
    LOG.info(
        "Got %d provinces, %d cities, %d areas, %d streets",
        len(store.provinces), len(store.cities), len(store.areas), len(store.streets),
    )
    return store
