"""Tests for order-preserving batch embedding."""

import logging

import numpy as np
import pytest

from core.exceptions import EmbeddingBatchError
from rag.batch_embedder import embed_all, iter_batches


class RecordingEmbedder:
    """Maps "t<n>" to [n, -n] and records every batch it receives."""

    def __init__(self, fail_on_batch=None, drop_last=False):
        self.batches = []
        self.fail_on_batch = fail_on_batch
        self.drop_last = drop_last

    def __call__(self, texts):
        self.batches.append(list(texts))
        if self.fail_on_batch == len(self.batches):
            raise RuntimeError("model crashed")
        vectors = [[float(t[1:]), -float(t[1:])] for t in texts]
        return vectors[:-1] if self.drop_last else vectors


def test_iter_batches_are_contiguous():
    batches = list(iter_batches(list(range(10)), 4))
    assert batches == [(0, [0, 1, 2, 3]), (4, [4, 5, 6, 7]), (8, [8, 9])]


def test_output_index_matches_input_index():
    texts = [f"t{i}" for i in range(10)]
    embedder = RecordingEmbedder()

    vectors = embed_all(texts, 4, embedder, progress_callback=None)

    assert [len(b) for b in embedder.batches] == [4, 4, 2]
    assert len(vectors) == 10
    assert vectors[7] == RecordingEmbedder()(["t7"])[0]
    assert vectors == [[float(i), -float(i)] for i in range(10)]


@pytest.mark.parametrize("batch_size", [1, 3, 10, 64])
def test_result_is_independent_of_batch_size(batch_size):
    texts = [f"t{i}" for i in range(10)]
    assert embed_all(texts, batch_size, RecordingEmbedder(), progress_callback=None) == \
        embed_all(texts, 1, RecordingEmbedder(), progress_callback=None)


def test_numpy_output_is_converted_to_lists():
    def embed_fn(texts):
        return np.ones((len(texts), 3))

    vectors = embed_all(["a", "b", "c"], 2, embed_fn, progress_callback=None)

    assert vectors == [[1.0, 1.0, 1.0]] * 3
    assert all(isinstance(v, list) for v in vectors)


def test_failure_aborts_remaining_batches():
    texts = [f"t{i}" for i in range(10)]
    embedder = RecordingEmbedder(fail_on_batch=2)

    with pytest.raises(EmbeddingBatchError) as exc_info:
        embed_all(texts, 4, embedder, progress_callback=None)

    error = exc_info.value
    assert error.batch_number == 2
    assert (error.start, error.end) == (4, 8)
    assert "model crashed" in str(error)
    assert len(embedder.batches) == 2


def test_wrong_vector_count_is_an_error():
    with pytest.raises(EmbeddingBatchError):
        embed_all(["t0", "t1"], 2, RecordingEmbedder(drop_last=True), progress_callback=None)


def test_progress_is_reported_after_each_batch():
    progress = []

    embed_all([f"t{i}" for i in range(10)], 4, RecordingEmbedder(),
              progress_callback=lambda done, total: progress.append((done, total)))

    assert progress == [(4, 10), (8, 10), (10, 10)]


def test_empty_input_never_calls_embed_fn():
    embedder = RecordingEmbedder()
    assert embed_all([], 4, embedder) == []
    assert embedder.batches == []


def test_batch_size_must_be_positive():
    with pytest.raises(ValueError):
        embed_all(["t0"], 0, RecordingEmbedder())


def test_batch_progress_is_logged(caplog):
    with caplog.at_level(logging.INFO, logger="rag.batch_embedder"):
        embed_all([f"t{i}" for i in range(10)], 4, RecordingEmbedder())

    messages = [r.getMessage() for r in caplog.records]
    assert messages == [
        "Processed batch 1/3 (40.00%)",
        "Processed batch 2/3 (80.00%)",
        "Processed batch 3/3 (100.00%)",
    ]
