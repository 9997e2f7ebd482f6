"""
Shared test fixtures.

The sample dataset is a small slice of the mainland China division codes:
two provinces, three cities, three areas and four streets. Indexed, it
uses keys 1..24:

    11 北京市 (1,14)
      1101 市辖区 (2,13)
        110101 东城区 (3,8)
          110101001 东华门街道 (4,5)
          110101002 景山街道 (6,7)
        110102 西城区 (9,12)
          110102001 西长安街街道 (10,11)
    13 河北省 (15,24)
      1301 石家庄市 (16,21)
        130102 长安区 (17,20)
          130102001 建北街道 (18,19)
      1302 唐山市 (22,23)
"""

import json

import pytest

from nested_division.loader import RecordStore

PROVINCES = [
    {"code": "11", "name": "北京市"},
    {"code": "13", "name": "河北省"},
]
CITIES = [
    {"code": "1101", "name": "市辖区", "parent_code": "11"},
    {"code": "1301", "name": "石家庄市", "parent_code": "13"},
    {"code": "1302", "name": "唐山市", "parent_code": "13"},
]
AREAS = [
    {"code": "110101", "name": "东城区", "parent_code": "1101"},
    {"code": "110102", "name": "西城区", "parent_code": "1101"},
    {"code": "130102", "name": "长安区", "parent_code": "1301"},
]
STREETS = [
    {"code": "110101001", "name": "东华门街道", "parent_code": "110101"},
    {"code": "110101002", "name": "景山街道", "parent_code": "110101"},
    {"code": "110102001", "name": "西长安街街道", "parent_code": "110102"},
    {"code": "130102001", "name": "建北街道", "parent_code": "130102"},
]


@pytest.fixture
def sample_store():
    """Two-province dataset covering all four levels."""
    return RecordStore.from_dicts(
        provinces=PROVINCES,
        cities=CITIES,
        areas=AREAS,
        streets=STREETS,
    )


@pytest.fixture
def chain_store():
    """One node per level: A > B > C > D."""
    return RecordStore.from_dicts(
        provinces=[{"code": "11", "name": "A"}],
        cities=[{"code": "1101", "parent_code": "11", "name": "B"}],
        areas=[{"code": "110101", "parent_code": "1101", "name": "C"}],
        streets=[{"code": "1101010001", "parent_code": "110101", "name": "D"}],
    )


@pytest.fixture
def data_dir(tmp_path):
    """Dataset directory with the sample records as JSON files."""
    path = tmp_path / "data"
    path.mkdir()
    for filename, records in (
        ("provinces.json", PROVINCES),
        ("cities.json", CITIES),
        ("areas.json", AREAS),
        ("streets.json", STREETS),
    ):
        (path / filename).write_text(json.dumps(records, ensure_ascii=False), encoding="utf-8")
    return path
