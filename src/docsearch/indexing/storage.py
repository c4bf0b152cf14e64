"""Reading and writing the vector database artifact (``vector-db.json``)."""

import os
import tempfile
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from ..entities.vector_db import VectorDatabase
from ..errors import VectorDatabaseError


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def dump_vector_database(database: VectorDatabase) -> str:
    """Serialize to the artifact JSON format (camelCase keys, optional fields omitted)."""
    return database.model_dump_json(by_alias=True, exclude_none=True, indent=2)


def parse_vector_database(payload: str | bytes) -> VectorDatabase:
    """Parse and validate artifact JSON.

    Raises:
        VectorDatabaseError: If the payload is not valid JSON or violates the schema
    """
    try:
        return VectorDatabase.model_validate_json(payload)
    except ValidationError as e:
        raise VectorDatabaseError(
            "Invalid vector database",
            details={"errors": e.error_count()},
            original_error=e,
        ) from e


def save_vector_database(database: VectorDatabase, path: str | Path) -> Path:
    """Write the artifact, replacing any previous one.

    The file is written to a temporary sibling first and then moved into
    place, so a crash never leaves a truncated artifact behind.

    Args:
        database: Database to persist
        path: Target file path

    Returns:
        The path written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(dump_vector_database(database))
        # mkstemp creates 0600; the artifact is served to other users
        os.chmod(tmp_name, 0o666 & ~_current_umask())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.info(f"Vector database saved: {path} ({len(database.chunks)} chunks)")
    return path


def load_vector_database(path: str | Path) -> VectorDatabase:
    """Read and validate an artifact from disk.

    Raises:
        VectorDatabaseError: If the file is missing, unreadable or invalid
    """
    path = Path(path)
    try:
        payload = path.read_bytes()
    except OSError as e:
        raise VectorDatabaseError(
            f"Cannot read vector database: {path}",
            original_error=e,
        ) from e

    database = parse_vector_database(payload)
    logger.debug(f"Loaded {len(database.chunks)} chunks from {path}")
    return database
