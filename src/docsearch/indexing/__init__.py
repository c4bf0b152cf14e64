"""Vector database building and persistence."""

from .builder import BuildStats, VectorDatabaseBuilder
from .storage import (
    dump_vector_database,
    load_vector_database,
    parse_vector_database,
    save_vector_database,
)

__all__ = [
    "VectorDatabaseBuilder",
    "BuildStats",
    "dump_vector_database",
    "parse_vector_database",
    "load_vector_database",
    "save_vector_database",
]
