"""Query-time context: embed a question, search, and format the answer."""

from loguru import logger

from ..batch.progress import BatchProgress, BatchStage, ProgressCallback
from ..embedder.embedder import Embedder
from ..entities.search_result import Answer
from ..utils.async_helpers import run_async_in_sync_context
from ..utils.single_flight import SingleFlight
from .formatter import format_answer
from .search import VectorSearch


class SearchSession:
    """Everything needed to answer queries against one vector database.

    Construct one per page session or process and pass it to whatever
    handles queries. Start-up work (loading the database and the model)
    happens once, however many queries arrive while it runs.

    Attributes:
        embedder: Embedder for query text
        search: Vector search over the database
        top_k: Default number of results per query

    Example:
        >>> session = SearchSession(Embedder(model, text_prefix="query: "),
        ...                         VectorSearch("site/vector-db.json"))
        >>> answer = await session.query("How do I install it?")
        >>> print(answer.answer)
    """

    def __init__(self, embedder: Embedder, search: VectorSearch, top_k: int = 3):
        if top_k < 1:
            raise ValueError("top_k must be at least 1")
        self.embedder = embedder
        self.search = search
        self.top_k = top_k
        self._started: SingleFlight[bool] = SingleFlight("search session")
        self._on_progress: ProgressCallback | None = None

    async def initialize(self, on_progress: ProgressCallback | None = None) -> None:
        """Load the vector database, then the embedding model.

        Progress is reported at 20% (database), 60% (model) and 100%.

        Raises:
            VectorDatabaseError: If the database cannot be loaded
            ModelLoadError: If the model cannot be loaded
        """
        self._on_progress = on_progress
        await self._started.get(self._start)

    async def _start(self) -> bool:
        try:
            self._report(20)
            await self.search.load()

            self._report(60)
            await self.embedder.initialize()

            self._report(100)
        except Exception as e:
            logger.error(f"Search initialization failed: {e}")
            raise
        return True

    def _report(self, percent: int) -> None:
        if self._on_progress is not None:
            self._on_progress(BatchProgress(
                stage=BatchStage.LOADING if percent < 100 else BatchStage.COMPLETE,
                current=percent,
                total=100,
            ))

    def is_ready(self) -> bool:
        return self._started.ready

    async def query(self, text: str, top_k: int | None = None) -> Answer:
        """Answer ``text`` from the documentation.

        Args:
            text: The user's question
            top_k: Number of results to retrieve (defaults to ``self.top_k``)

        Returns:
            Formatted answer with sources; a "nothing found" answer when no
            chunk matches
        """
        await self.initialize(self._on_progress)

        k = top_k or self.top_k
        query_vector = await self.embedder.embed(text)
        results = await self.search.search(query_vector, k)
        logger.debug(f"Query '{text}' matched {len(results)} chunks")

        return format_answer(text, results)

    def query_sync(self, text: str, top_k: int | None = None) -> Answer:
        """Synchronous wrapper around ``query``."""
        return run_async_in_sync_context(self.query(text, top_k))
