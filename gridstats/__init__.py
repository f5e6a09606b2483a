from . import (
    canon,
    exceptions,
    types,
    utils,
    config,
    validate,
    ingest,
    transform,
    summary,
    formats,
)
from .config import StatsConfig, default_config
from .summary import StatsAggregator, compute_aggregate

__all__ = [
    "canon",
    "exceptions",
    "types",
    "utils",
    "config",
    "validate",
    "ingest",
    "transform",
    "summary",
    "formats",
    "StatsConfig",
    "default_config",
    "StatsAggregator",
    "compute_aggregate",
]
