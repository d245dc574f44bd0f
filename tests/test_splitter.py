import os

import blake3
import pytest

from splitmerge import splitter
from splitmerge.const    import FORMAT_VERSION, HEADER_SIZE
from splitmerge.errors   import IncompleteWrite, SourceUnreadable
from splitmerge.header   import decode
from splitmerge.splitter import segment_count, split_file

DATA40 = bytes(range(40))


def _read_segment(path):
    with open(path, "rb") as f:
        raw = f.read()
    return decode(raw), raw[HEADER_SIZE:]


def test_forty_bytes_in_fifteen_byte_segments(make_file):
    src = make_file(DATA40)
    result = split_file(src, 15)

    assert not result.skipped
    assert result.segments == [src + ".seg0000", src + ".seg0001", src + ".seg0002"]
    assert not os.path.exists(src)

    headers, payloads = zip(*map(_read_segment, result.segments))
    assert [len(p) for p in payloads] == [15, 15, 10]
    assert b"".join(payloads) == DATA40
    assert [h.segment_number for h in headers] == [1, 2, 3]
    assert {h.file_size for h in headers} == {40}
    assert {h.fingerprint for h in headers} == {blake3.blake3(DATA40).digest()}
    assert {h.format_version for h in headers} == {FORMAT_VERSION}


def test_exact_multiple_fills_last_segment(make_file):
    result = split_file(make_file(bytes(30)), 15)
    assert [os.path.getsize(p) - HEADER_SIZE for p in result.segments] == [15, 15]


def test_keep_retains_source(make_file):
    src = make_file(DATA40)
    split_file(src, 15, keep=True)
    with open(src, "rb") as f:
        assert f.read() == DATA40


@pytest.mark.parametrize("size", [0, 1, 14, 15])
def test_small_file_is_not_split(make_file, segments_on_disk, size):
    src = make_file(bytes(size))
    result = split_file(src, 15)
    assert result.skipped
    assert result.segments == []
    assert segments_on_disk() == []
    assert os.path.getsize(src) == size


def test_segment_count():
    assert segment_count(40, 15) == 3
    assert segment_count(30, 15) == 2
    assert segment_count(16, 15) == 2


def test_missing_source(tmp_path):
    with pytest.raises(SourceUnreadable):
        split_file(tmp_path / "nope.bin", 15)


def test_segment_size_must_be_positive(make_file):
    with pytest.raises(ValueError):
        split_file(make_file(DATA40), 0)


def test_short_source_aborts_and_removes_segments(make_file, segments_on_disk, monkeypatch):
    # size and hash both agree on 50 bytes, but only 40 are left to copy:
    # the third segment comes up 5 bytes short
    src = make_file(DATA40)
    real_fingerprint = splitter.fingerprint_stream
    monkeypatch.setattr(splitter, "_source_size", lambda path: 50)
    monkeypatch.setattr(splitter, "fingerprint_stream", lambda f: (real_fingerprint(f)[0], 50))

    with pytest.raises(IncompleteWrite) as exc:
        split_file(src, 15)

    assert exc.value.path.endswith(".seg0002")
    assert segments_on_disk() == []
    with open(src, "rb") as f:
        assert f.read() == DATA40


@pytest.mark.parametrize("reported", [30, 50])
def test_source_changing_size_is_refused_before_writing(make_file, segments_on_disk, monkeypatch, reported):
    src = make_file(bytes(range(45)))
    monkeypatch.setattr(splitter, "_source_size", lambda path: reported)

    with pytest.raises(SourceUnreadable, match="changed while splitting"):
        split_file(src, 15)

    assert segments_on_disk() == []
    with open(src, "rb") as f:
        assert f.read() == bytes(range(45))


def test_header_invariants_hold_for_long_series(make_file):
    data = os.urandom(10 * 64)
    result = split_file(make_file(data), 64)

    headers, payloads = zip(*map(_read_segment, result.segments))
    assert len(result.segments) == 10
    assert [h.segment_number for h in headers] == list(range(1, 11))
    assert {h.file_size for h in headers} == {len(data)}
    assert {h.fingerprint for h in headers} == {blake3.blake3(data).digest()}
    assert [len(p) for p in payloads] == [64] * 10
    assert b"".join(payloads) == data


class _DiskFull:
    """Accepts the header, then fails like a full disk."""
    def __init__(self, f):
        self.f = f

    def write(self, data):
        if len(data) != HEADER_SIZE:
            raise OSError(28, "No space left on device")
        return self.f.write(data)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.f.close()


def test_write_failure_mid_split_leaves_no_segments(make_file, segments_on_disk, monkeypatch):
    real_open = open

    def flaky_open(file, mode="r", *args, **kw):
        f = real_open(file, mode, *args, **kw)
        return _DiskFull(f) if str(file).endswith(".seg0001") else f

    monkeypatch.setattr(splitter, "open", flaky_open, raising=False)
    src = make_file(DATA40)

    with pytest.raises(OSError, match="No space left"):
        split_file(src, 15)

    assert segments_on_disk() == []
    assert os.path.getsize(src) == 40


def test_source_delete_failure_is_only_a_warning(make_file, segments_on_disk, monkeypatch):
    src = make_file(DATA40)

    def refuse(path):
        raise PermissionError(13, "Permission denied", path)

    monkeypatch.setattr("splitmerge.cleanup.os.remove", refuse)
    result = split_file(src, 15)

    assert len(result.warnings) == 1
    assert result.warnings[0].path == src
    assert os.path.exists(src)
    assert len(segments_on_disk()) == 3
