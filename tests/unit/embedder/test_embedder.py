"""Tests for the async Embedder front end."""

import asyncio
import threading
import time

import pytest
from loguru import logger

from docsearch.batch.progress import BatchStage
from docsearch.embedder.base import BaseEmbeddingModel
from docsearch.embedder.embedder import Embedder
from docsearch.errors import DimensionMismatchError, EmbeddingError, ModelLoadError
from tests.utils.fake_models import CountingEmbeddingModel


class ConcurrencyTrackingModel(BaseEmbeddingModel):
    """Records the largest number of simultaneous embed calls."""

    def __init__(self, dimension: int = 4, delay: float = 0.02):
        self._dimension = dimension
        self.delay = delay
        self.active = 0
        self.max_active = 0
        self._lock = threading.Lock()

    def embed(self, texts):
        with self._lock:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        time.sleep(self.delay)
        with self._lock:
            self.active -= 1
        return [[float(len(t)), 1.0, 0.0, 0.0] for t in texts]

    @property
    def name(self):
        return "tracking"

    @property
    def dimension(self):
        return self._dimension


class FailingLoadModel(CountingEmbeddingModel):

    def __init__(self, failures: int = 1):
        super().__init__(dimension=4, load_delay=0.02)
        self.failures = failures

    def load(self):
        super().load()
        if self.load_calls <= self.failures:
            raise OSError("weights not found")


class WrongDimensionModel(CountingEmbeddingModel):

    def embed(self, texts):
        return [[0.5] * (self.dimension - 1) for _ in texts]


class BrokenModel(CountingEmbeddingModel):

    def embed(self, texts):
        raise RuntimeError("inference crashed")


class TestEmbedderInitialize:

    @pytest.mark.asyncio
    async def test_concurrent_initialize_loads_once(self):
        model = CountingEmbeddingModel(dimension=4, load_delay=0.05)
        embedder = Embedder(model)

        await asyncio.gather(*(embedder.initialize() for _ in range(8)))

        assert model.load_calls == 1
        assert embedder.is_ready()

    @pytest.mark.asyncio
    async def test_concurrent_embeds_share_the_load(self):
        model = CountingEmbeddingModel(dimension=4, load_delay=0.05)
        embedder = Embedder(model)

        vectors = await asyncio.gather(*(embedder.embed(f"text {i}") for i in range(5)))

        assert model.load_calls == 1
        assert len(vectors) == 5

    @pytest.mark.asyncio
    async def test_load_failure_reaches_all_waiters(self):
        model = FailingLoadModel(failures=1)
        embedder = Embedder(model)

        results = await asyncio.gather(
            *(embedder.initialize() for _ in range(4)), return_exceptions=True
        )

        assert model.load_calls == 1
        assert all(isinstance(r, ModelLoadError) for r in results)
        assert isinstance(results[0].original_error, OSError)
        assert not embedder.is_ready()

    @pytest.mark.asyncio
    async def test_retry_after_failure(self):
        model = FailingLoadModel(failures=1)
        embedder = Embedder(model)

        with pytest.raises(ModelLoadError):
            await embedder.initialize()
        await embedder.initialize()

        assert model.load_calls == 2
        assert embedder.is_ready()

    def test_properties_come_from_model(self, embedder, counting_model):
        assert embedder.dimension == counting_model.dimension == 8
        assert embedder.model_name == "mock-8"
        assert not embedder.is_ready()


class TestEmbedderClose:

    @pytest.mark.asyncio
    async def test_close_releases_model_and_allows_reload(self, embedder, counting_model):
        await embedder.embed("hello")

        embedder.close()

        assert counting_model.close_calls == 1
        assert not embedder.is_ready()

        await embedder.embed("again")
        assert counting_model.load_calls == 2

    def test_close_before_load(self, embedder, counting_model):
        embedder.close()
        assert counting_model.close_calls == 1


class TestEmbedderEmbed:

    @pytest.mark.asyncio
    async def test_vector_has_model_dimension(self, embedder):
        vector = await embedder.embed("hello")
        assert len(vector) == 8
        assert all(isinstance(x, float) for x in vector)

    @pytest.mark.asyncio
    async def test_deterministic(self, embedder):
        assert await embedder.embed("same") == await embedder.embed("same")

    @pytest.mark.asyncio
    async def test_text_prefix(self, counting_model):
        embedder = Embedder(counting_model, text_prefix="query: ")

        await embedder.embed("how to install")

        assert counting_model.embedded == ["query: how to install"]

    @pytest.mark.asyncio
    async def test_wrong_dimension_raises(self):
        embedder = Embedder(WrongDimensionModel(dimension=4))
        with pytest.raises(DimensionMismatchError):
            await embedder.embed("text")

    @pytest.mark.asyncio
    async def test_inference_error_wrapped(self):
        embedder = Embedder(BrokenModel(dimension=4))

        with pytest.raises(EmbeddingError) as exc_info:
            await embedder.embed("text")

        assert isinstance(exc_info.value.original_error, RuntimeError)


class TestEmbedBatch:

    @pytest.mark.asyncio
    async def test_preserves_input_order(self, embedder):
        texts = [f"chunk number {i}" for i in range(23)]

        batch = await embedder.embed_batch(texts, batch_size=5)
        singles = [await embedder.embed(t) for t in texts]

        assert batch == singles

    @pytest.mark.asyncio
    async def test_empty_input(self, embedder, counting_model):
        assert await embedder.embed_batch([]) == []
        assert counting_model.embedded == []

    @pytest.mark.asyncio
    async def test_invalid_batch_size(self, embedder):
        with pytest.raises(ValueError):
            await embedder.embed_batch(["a"], batch_size=0)

    @pytest.mark.asyncio
    async def test_progress_after_each_batch(self, embedder):
        updates = []

        await embedder.embed_batch(
            [f"t{i}" for i in range(25)], batch_size=10, on_progress=updates.append
        )

        assert [u.current for u in updates] == [10, 20, 25]
        assert all(u.total == 25 for u in updates)
        assert all(u.stage is BatchStage.EMBEDDING for u in updates)
        assert [u.batch_num for u in updates] == [1, 2, 3]
        assert updates[-1].total_batches == 3
        assert updates[-1].percent == 1.0

    @pytest.mark.asyncio
    async def test_progress_logged_without_callback(self, embedder):
        messages = []
        handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="INFO")
        try:
            await embedder.embed_batch([f"t{i}" for i in range(4)], batch_size=3)
        finally:
            logger.remove(handler_id)

        assert "Embedded 3/4 chunks" in messages
        assert "Embedded 4/4 chunks" in messages

    @pytest.mark.asyncio
    async def test_concurrency_bounded_by_batch_size(self):
        model = ConcurrencyTrackingModel()
        embedder = Embedder(model)

        await embedder.embed_batch([f"text {i}" for i in range(12)], batch_size=3)

        assert 1 <= model.max_active <= 3
