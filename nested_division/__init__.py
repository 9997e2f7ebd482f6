"""
nested-division: encode an administrative division dataset as a nested set.

Provinces, cities, areas and streets are linked only by their fixed-width
codes. This package rebuilds the four-level hierarchy from those codes,
assigns every node a ``(left, right, depth)`` triple so that subtree
membership becomes a range comparison, and emits one row per node.

Usage:
    from nested_division import RecordStore, build_forest, assign_keys, emit, ListSink

    store = RecordStore.from_dicts(
        provinces=[{"code": "11", "name": "Beijing"}],
        cities=[{"code": "1101", "name": "Districts", "parent_code": "11"}],
    )
    forest = build_forest(store)
    assign_keys(forest)

    sink = ListSink()
    emit(forest, sink)
"""

from .builder import TreeBuilder, build_forest
from .codes import HierarchyKey, area_of, city_of, parse_key, province_of
from .config import BuildConfig
from .emitter import (
    ListSink,
    RowSink,
    SQLiteSink,
    SQLTextSink,
    build_sink,
    emit,
    format_insert,
    iter_rows,
)
from .errors import (
    ConfigError,
    DatasetLoadError,
    DivisionError,
    DuplicateCodeError,
    IndexInvariantError,
    MalformedCodeError,
    MalformedInputError,
    OrphanRecordError,
    SinkError,
)
from .indexer import assign_keys, index_tree, root_offsets, subtree_size, verify_forest
from .loader import RecordStore, load_dataset, load_records
from .models import Area, FlatRecord, Level, NestedRow
from .pipeline import BuildResult, index_store, run, run_config

__all__ = [
    # Models
    "Area",
    "FlatRecord",
    "Level",
    "NestedRow",
    "HierarchyKey",
    # Code resolution
    "province_of",
    "city_of",
    "area_of",
    "parse_key",
    # Stages
    "RecordStore",
    "load_dataset",
    "load_records",
    "TreeBuilder",
    "build_forest",
    "index_tree",
    "assign_keys",
    "subtree_size",
    "root_offsets",
    "verify_forest",
    "iter_rows",
    "format_insert",
    "emit",
    # Sinks
    "RowSink",
    "SQLTextSink",
    "SQLiteSink",
    "ListSink",
    "build_sink",
    # Pipeline
    "BuildConfig",
    "BuildResult",
    "index_store",
    "run",
    "run_config",
    # Exceptions
    "DivisionError",
    "ConfigError",
    "DatasetLoadError",
    "MalformedInputError",
    "MalformedCodeError",
    "OrphanRecordError",
    "DuplicateCodeError",
    "SinkError",
    "IndexInvariantError",
]
