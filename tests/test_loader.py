"""Tests for nested_division.loader — dataset files and the record store."""

import json

import pytest
from pydantic import ValidationError

from nested_division.errors import DatasetLoadError
from nested_division.loader import RecordStore, load_dataset, load_records
from nested_division.models import FlatRecord, Level


class TestFlatRecord:
    def test_province_defaults_to_root_parent(self):
        record = FlatRecord.model_validate({"code": "11", "name": "北京市"})
        assert record.parent_code == "0"

    def test_camel_case_parent(self):
        record = FlatRecord.model_validate({"code": "1101", "name": "C", "parentCode": "11"})
        assert record.parent_code == "11"

    def test_frozen(self):
        record = FlatRecord(code="11", name="A")
        with pytest.raises(ValidationError):
            record.code = "12"


class TestLoadRecords:
    def test_reads_in_file_order(self, data_dir):
        records = load_records(data_dir / "cities.json")
        assert [r.code for r in records] == ["1101", "1301", "1302"]
        assert records[1].name == "石家庄市"

    def test_missing_file(self, tmp_path):
        with pytest.raises(DatasetLoadError, match="Cannot read"):
            load_records(tmp_path / "nope.json")

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "provinces.json"
        path.write_text(json.dumps({"code": "11", "name": "A"}), encoding="utf-8")
        with pytest.raises(DatasetLoadError):
            load_records(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "provinces.json"
        path.write_text("[{", encoding="utf-8")
        with pytest.raises(DatasetLoadError):
            load_records(path)

    def test_record_without_name(self, tmp_path):
        path = tmp_path / "provinces.json"
        path.write_text(json.dumps([{"code": "11"}]), encoding="utf-8")
        with pytest.raises(DatasetLoadError):
            load_records(path)

    def test_empty_list(self, tmp_path):
        path = tmp_path / "streets.json"
        path.write_text("[]", encoding="utf-8")
        assert load_records(path) == []


class TestLoadDataset:
    def test_all_levels(self, data_dir):
        store = load_dataset(data_dir)
        assert len(store.provinces) == 2
        assert len(store.cities) == 3
        assert len(store.areas) == 3
        assert len(store.streets) == 4
        assert len(store) == 12
        assert store.records(Level.STREET) is store.streets

    def test_missing_directory(self, tmp_path):
        with pytest.raises(DatasetLoadError, match="not found"):
            load_dataset(tmp_path / "missing")

    def test_missing_level_file(self, data_dir):
        (data_dir / "areas.json").unlink()
        with pytest.raises(DatasetLoadError, match="areas.json"):
            load_dataset(data_dir)


class TestFromDicts:
    def test_defaults_empty(self):
        store = RecordStore.from_dicts(provinces=[{"code": "11", "name": "A"}])
        assert [r.code for r in store.provinces] == ["11"]
        assert store.cities == [] and store.areas == [] and store.streets == []
