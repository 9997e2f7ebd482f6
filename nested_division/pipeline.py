"""
End-to-end build: load records, assemble the forest, index it, emit rows.

The stages run once each, in order, and any failure aborts the run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .builder import build_forest
from .config import BuildConfig
from .emitter import RowSink, build_sink, emit
from .indexer import assign_keys, verify_forest
from .loader import RecordStore, load_dataset
from .models import Area

LOG = logging.getLogger("nested_division.pipeline")


@dataclass
class BuildResult:
    """Summary of one run."""

    forest: list[Area]
    node_count: int
    max_key: int
    rows_emitted: int = 0


def index_store(store: RecordStore) -> BuildResult:
    """Build and index the forest for ``store`` and check its invariants."""
    forest = build_forest(store)
    LOG.info("Tree with %d roots", len(forest))

    max_key = assign_keys(forest)
    node_count = verify_forest(forest)
    return BuildResult(forest=forest, node_count=node_count, max_key=max_key)


def run(store: RecordStore, sink: RowSink) -> BuildResult:
    """Index ``store`` and emit every row into ``sink``."""
    result = index_store(store)
    result.rows_emitted = emit(result.forest, sink)
    return result


def run_config(config: BuildConfig) -> BuildResult:
    """Run a build described by ``config``."""
    store = load_dataset(config.data_dir)
    sink = build_sink(config.sink, config.output, config.table)
    return run(store, sink)
