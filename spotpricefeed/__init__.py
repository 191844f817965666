from . import (
    canon,
    config,
    exceptions,
    types,
    fetch,
    resolve,
    timestamps,
    units,
    validate,
    ingest,
    selection,
    pricing,
    formats,
    writer,
    pipeline,
)

__all__ = [
    "canon",
    "config",
    "exceptions",
    "types",
    "fetch",
    "resolve",
    "timestamps",
    "units",
    "validate",
    "ingest",
    "selection",
    "pricing",
    "formats",
    "writer",
    "pipeline",
]
