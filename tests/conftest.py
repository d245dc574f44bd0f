import os

import pytest

from splitmerge import split_file


@pytest.fixture
def make_file(tmp_path):
    """Write `data` to tmp_path/name and return the path as str."""
    def _make(data: bytes, name: str = "payload.bin") -> str:
        path = tmp_path / name
        path.write_bytes(data)
        return str(path)
    return _make


@pytest.fixture
def series(make_file):
    """Split `data` into segments of `segment_size`, keeping the source."""
    def _series(data: bytes, segment_size: int, name: str = "payload.bin"):
        src = make_file(data, name)
        result = split_file(src, segment_size, keep=True)
        return src, result
    return _series


@pytest.fixture
def segments_on_disk(tmp_path):
    """Names of every .segNNNN file currently in tmp_path."""
    return lambda: sorted(p for p in os.listdir(tmp_path) if ".seg" in p)
