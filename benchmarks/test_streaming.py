from __future__ import annotations

import pytest
from pytest_benchmark.fixture import BenchmarkFixture

import sexp
from benchmarks.inputs import LARGE, MULTI, MULTI_COUNT


def _drain_parser(data: bytes) -> int:
    with sexp.parse_incremental(data) as parser:
        return sum(1 for _ in parser)


def _drain_stream(data: bytes, buffer: int) -> int:
    with sexp.spawn(data, buffer=buffer) as stream:
        return sum(1 for _ in stream)


def test_incremental(benchmark: BenchmarkFixture) -> None:
    assert benchmark(_drain_parser, MULTI) == MULTI_COUNT


@pytest.mark.parametrize("buffer", [1, 16, 256])
def test_threaded(benchmark: BenchmarkFixture, buffer: int) -> None:
    benchmark.extra_info["buffer"] = buffer
    assert benchmark(_drain_stream, MULTI, buffer) == MULTI_COUNT


@pytest.mark.parametrize("chunk_size", [64, 8192])
def test_chunk_size(benchmark: BenchmarkFixture, chunk_size: int) -> None:
    benchmark.extra_info["chunk_size"] = chunk_size
    benchmark(sexp.parse, LARGE, chunk_size=chunk_size)
