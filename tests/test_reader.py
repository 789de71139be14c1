import asyncio
import hashlib
import io
import random
import re
import sys
from concurrent.futures import ThreadPoolExecutor

import pytest

from filehash import reader
from filehash.engines import HashlibEngine
from filehash.errors import AllocationFailure, ReadFailure, SourceUnavailable
from filehash.reader import hash_bytes, hash_file, hash_file_async, hash_source, iter_chunks

EMPTY_DIGEST = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def write_file(path, data):
    path.write_bytes(data)
    return path


def random_bytes(length, seed=0):
    rng = random.Random(seed)
    return bytes(rng.randrange(256) for _ in range(length))


class FailingSource(io.RawIOBase):
    """Returns one good chunk, then raises an I/O error."""

    def __init__(self, good=b"x" * 100):
        self._good = good
        self._calls = 0

    def readable(self):
        return True

    def readinto(self, buffer):
        self._calls += 1
        if self._calls == 1:
            n = min(len(buffer), len(self._good))
            buffer[:n] = self._good[:n]
            return n
        raise OSError(5, "Input/output error")


class StallingSource(io.RawIOBase):
    """Non-blocking style source: some data, then None (no data yet), then more."""

    def __init__(self, results=(b"ab", None, b"c")):
        self._results = list(results)

    def readable(self):
        return True

    def readinto(self, buffer):
        if not self._results:
            return 0
        data = self._results.pop(0)
        if data is None:
            return None
        buffer[:len(data)] = data
        return len(data)


class StallingReadSource:
    """read()-only source that reports no data available."""

    def __init__(self):
        self._results = [b"ab", None, b"c"]

    def read(self, size=-1):
        return self._results.pop(0) if self._results else b""


class ReadOnlySource:
    """File-like object without readinto()."""

    def __init__(self, data):
        self._stream = io.BytesIO(data)

    def read(self, size=-1):
        return self._stream.read(size)


def test_empty_file(tmp_path):
    path = write_file(tmp_path / "empty.txt", b"")
    assert hash_file(path) == EMPTY_DIGEST


def test_known_content(tmp_path):
    path = write_file(tmp_path / "test.txt", b"Hello, World!")
    assert hash_file(path) == "dffd6021bb2bd5b0af676290809ec3a53191dd81c7f70a4b28688a362182986f"


def test_binary_content(tmp_path):
    path = write_file(tmp_path / "binary.bin", bytes(range(10)))
    assert hash_file(path) == "1f825aa2f0020ef7cf91dfa30da4668d791c5d4824fc8e41354b89ec05795ab3"


def test_accepts_str_path(tmp_path):
    path = write_file(tmp_path / "abc.txt", b"abc")
    assert hash_file(str(path)) == hashlib.sha256(b"abc").hexdigest()


@pytest.mark.parametrize("chunk_size", [1, 17, 64, 65, 1000, 4096])
def test_chunk_size_does_not_change_digest(tmp_path, chunk_size):
    data = random_bytes(2500, seed=3)
    path = write_file(tmp_path / "data.bin", data)

    assert hash_file(path, chunk_size=chunk_size) == hashlib.sha256(data).hexdigest()


def test_exact_block_multiple_file(tmp_path):
    data = random_bytes(64 * 32, seed=9)
    path = write_file(tmp_path / "blocks.bin", data)
    assert hash_file(path, chunk_size=64) == hashlib.sha256(data).hexdigest()


def test_large_file(tmp_path):
    data = b"A" * (1024 * 1024)
    path = write_file(tmp_path / "large.bin", data)

    digest = hash_file(path)
    assert re.match(r"^[0-9a-f]{64}$", digest)
    assert digest == hashlib.sha256(data).hexdigest()


def test_hashlib_engine(tmp_path):
    data = random_bytes(5000, seed=1)
    path = write_file(tmp_path / "data.bin", data)
    assert hash_file(path, engine="hashlib") == hash_file(path, engine="software")


def test_engine_instance_is_accepted(tmp_path):
    path = write_file(tmp_path / "abc.txt", b"abc")
    assert hash_file(path, engine=HashlibEngine()) == hashlib.sha256(b"abc").hexdigest()


def test_missing_file(tmp_path):
    missing = tmp_path / "does_not_exist.txt"
    with pytest.raises(SourceUnavailable) as excinfo:
        hash_file(missing)
    assert excinfo.value.path == missing
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)


def test_directory_is_unavailable(tmp_path):
    with pytest.raises(SourceUnavailable):
        hash_file(tmp_path)


def test_special_characters_in_path(tmp_path):
    special = tmp_path / "special dir!@#"
    special.mkdir()
    path = write_file(special / "test file.txt", b"Special path test")
    assert hash_file(path) == hashlib.sha256(b"Special path test").hexdigest()


def test_same_content_same_digest(tmp_path):
    a = write_file(tmp_path / "file1.txt", b"Identical content for testing")
    b = write_file(tmp_path / "file2.txt", b"Identical content for testing")
    assert hash_file(a) == hash_file(b)


def test_different_content_different_digest(tmp_path):
    a = write_file(tmp_path / "file1.txt", b"Content A")
    b = write_file(tmp_path / "file2.txt", b"Content B")
    assert hash_file(a) != hash_file(b)


def test_files_hashed_concurrently_by_caller(tmp_path):
    paths = [write_file(tmp_path / f"file_{i}.txt", f"Content {i}".encode()) for i in range(5)]

    with ThreadPoolExecutor(max_workers=5) as pool:
        digests = list(pool.map(hash_file, paths))

    assert len(set(digests)) == 5
    for path, digest in zip(paths, digests):
        assert digest == hashlib.sha256(path.read_bytes()).hexdigest()


def test_hash_file_async(tmp_path):
    path = write_file(tmp_path / "abc.txt", b"abc")
    assert asyncio.run(hash_file_async(path)) == hashlib.sha256(b"abc").hexdigest()


def test_hash_file_async_propagates_errors(tmp_path):
    with pytest.raises(SourceUnavailable):
        asyncio.run(hash_file_async(tmp_path / "missing"))


def test_hash_source_returns_raw_digest():
    digest = hash_source(io.BytesIO(b"abc"), chunk_size=2)
    assert digest == hashlib.sha256(b"abc").digest()


def test_hash_source_without_readinto():
    data = random_bytes(300, seed=5)
    digest = hash_source(ReadOnlySource(data), chunk_size=64)
    assert digest == hashlib.sha256(data).digest()


def test_read_failure_mid_stream():
    with pytest.raises(ReadFailure) as excinfo:
        hash_source(FailingSource(), chunk_size=64)
    assert isinstance(excinfo.value.__cause__, OSError)


def test_read_failure_closes_file(tmp_path, monkeypatch):
    path = write_file(tmp_path / "data.bin", b"data")
    opened = []

    def fake_open(p, mode):
        source = FailingSource()
        opened.append(source)
        return source

    monkeypatch.setattr(reader, "open", fake_open, raising=False)

    with pytest.raises(ReadFailure) as excinfo:
        hash_file(path)

    assert excinfo.value.path == path
    assert opened[0].closed


def test_allocation_failure(monkeypatch):
    def no_memory(size):
        raise MemoryError

    monkeypatch.setattr(reader, "bytearray", no_memory, raising=False)

    with pytest.raises(AllocationFailure):
        hash_source(io.BytesIO(b"abc"))


@pytest.mark.parametrize("chunk_size", [0, -1, 1.5, True])
def test_invalid_chunk_size(tmp_path, chunk_size):
    path = write_file(tmp_path / "abc.txt", b"abc")
    with pytest.raises(ValueError):
        hash_file(path, chunk_size=chunk_size)


def test_iter_chunks_reuses_one_buffer():
    chunks = []
    for chunk in iter_chunks(io.BytesIO(b"abcdefg"), chunk_size=3):
        chunks.append(bytes(chunk))
    assert chunks == [b"abc", b"def", b"g"]


def test_hash_bytes():
    assert hash_bytes(b"abc") == hashlib.sha256(b"abc").hexdigest()
    assert hash_bytes(b"abc", engine="hashlib") == hashlib.sha256(b"abc").hexdigest()


def test_no_data_available_is_not_end_of_input():
    with pytest.raises(ReadFailure):
        hash_source(StallingSource(), chunk_size=64)


def test_no_data_available_without_readinto():
    with pytest.raises(ReadFailure):
        hash_source(StallingReadSource(), chunk_size=64)


def test_stalled_file_reports_path(tmp_path, monkeypatch):
    path = write_file(tmp_path / "pipe", b"abc")
    monkeypatch.setattr(reader, "open", lambda p, mode: StallingSource(), raising=False)

    with pytest.raises(ReadFailure) as excinfo:
        hash_file(path)
    assert excinfo.value.path == path


def test_unallocatable_chunk_size(tmp_path):
    path = write_file(tmp_path / "abc.txt", b"abc")

    with pytest.raises(AllocationFailure) as excinfo:
        hash_file(path, chunk_size=sys.maxsize + 1)
    assert excinfo.value.path == path
    assert isinstance(excinfo.value.__cause__, OverflowError)


def test_allocation_failure_reports_path(tmp_path, monkeypatch):
    path = write_file(tmp_path / "abc.txt", b"abc")

    def no_memory(size):
        raise MemoryError

    monkeypatch.setattr(reader, "bytearray", no_memory, raising=False)

    with pytest.raises(AllocationFailure) as excinfo:
        hash_file(path)
    assert excinfo.value.path == path
