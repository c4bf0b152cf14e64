"""Progress updates for embedding batches and search session start-up."""

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from loguru import logger


class BatchStage(Enum):
    EMBEDDING = "embedding"
    LOADING = "loading"
    COMPLETE = "complete"


@dataclass(frozen=True)
class BatchProgress:
    """``current`` of ``total`` items done at ``stage``.

    Embedding updates also carry the 1-indexed batch position.
    """

    stage: BatchStage
    current: int
    total: int
    batch_num: int = 0
    total_batches: int = 0

    @property
    def percent(self) -> float:
        return self.current / self.total if self.total > 0 else 0.0


ProgressCallback = Callable[[BatchProgress], None]


def log_progress(progress: BatchProgress) -> None:
    """Fallback callback when the caller passes none."""
    if progress.stage is BatchStage.EMBEDDING:
        logger.info(f"Embedded {progress.current}/{progress.total} chunks")
    else:
        logger.info(f"{progress.stage.value}: {progress.percent:.0%}")
