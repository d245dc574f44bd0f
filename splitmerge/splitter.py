# ==================================================
# splitmerge/splitter.py
# ==================================================
import logging, os
from dataclasses import dataclass, field
from typing import BinaryIO, List

from .cleanup import discard, discard_all
from .const   import BUFFER_SIZE, DEFAULT_SEGMENT_SIZE
from .errors  import CleanupWarning, IncompleteWrite, SourceUnreadable
from .hasher  import fingerprint_stream
from .header  import SegmentHeader, encode
from .naming  import segment_path

log = logging.getLogger(__name__)


@dataclass
class SplitResult:
    source:    str
    file_size: int = 0
    segments:  List[str] = field(default_factory=list)
    skipped:   bool = False          # source already fits in one segment
    warnings:  List[CleanupWarning] = field(default_factory=list)


# ── helpers ───────────────────────────────────────────────────
def _source_size(path: str) -> int:
    try:
        return os.stat(path).st_size
    except OSError as e:
        raise SourceUnreadable(path, f"cannot inspect source file {path}: {e.strerror}") from e


def _copy_exact(src: BinaryIO, dst: BinaryIO, length: int, bufsize: int = BUFFER_SIZE) -> int:
    """Copy up to `length` bytes; returns how many actually made it."""
    left = length
    while left > 0:
        data = src.read(min(bufsize, left))
        if not data:
            break
        dst.write(data)
        left -= len(data)
    return length - left


def segment_count(file_size: int, segment_size: int) -> int:
    return (file_size + segment_size - 1) // segment_size


# ── public api ────────────────────────────────────────────────
def split_file(path, segment_size: int = DEFAULT_SEGMENT_SIZE, keep: bool = False) -> SplitResult:
    """
    Cut `path` into `<path>.seg0000`, `<path>.seg0001`, ... each prefixed by a
    segment header carrying the original size and BLAKE3 fingerprint.

    • Files no larger than `segment_size` are left alone (result.skipped).
    • On failure every segment written so far is deleted and the error re-raised;
      the source is never touched in that case.
    • On success the source is deleted unless `keep`; failing to do so is only
      a warning since the segments are self-sufficient.
    """
    if segment_size <= 0:
        raise ValueError(f"segment size must be positive, got {segment_size}")
    path = os.fspath(path)

    file_size = _source_size(path)
    result = SplitResult(path, file_size)
    if file_size <= segment_size:
        log.info("No need to split %s as it would only occupy a single segment anyway: "
                 "file size: %d vs. segment size: %d.", path, file_size, segment_size)
        result.skipped = True
        return result

    try:
        _write_segments(path, file_size, segment_size, result.segments)
    except BaseException:
        if result.segments:
            discard_all(result.segments)
            log.info("Clean-Up: generated segment files for %s have been deleted.", path)
        raise

    log.info("OK split: %s @ %d bytes --> %d segment files.", path, file_size, len(result.segments))

    if not keep:
        warning = discard(path)
        if warning is None:
            log.info("Clean-Up: source file %s has been deleted.", path)
        else:
            result.warnings.append(warning)
    return result


def _write_segments(path: str, file_size: int, segment_size: int, produced: List[str]):
    # `produced` is filled as we go so the caller can clean up after a failure
    try:
        src = open(path, "rb")
    except OSError as e:
        raise SourceUnreadable(path, f"cannot open source file {path}: {e.strerror}") from e

    with src:
        fingerprint, hashed = fingerprint_stream(src)
        if hashed != file_size:
            raise SourceUnreadable(path, f"source file {path} changed while splitting:"
                                         f" {hashed} bytes read, {file_size} expected")
        src.seek(0)

        remaining = file_size
        for index in range(segment_count(file_size, segment_size)):
            seg_path = segment_path(path, index)
            length   = min(segment_size, remaining)
            header   = SegmentHeader.for_segment(index, file_size, fingerprint)

            produced.append(seg_path)
            with open(seg_path, "wb") as out:
                out.write(encode(header))
                copied = _copy_exact(src, out, length)

            if copied != length:
                raise IncompleteWrite(seg_path, f"failed to complete writing to segment file {seg_path}:"
                                                f" {copied} of {length} bytes copied; aborting")
            log.debug("wrote %s (segment %d, %d bytes)", seg_path, header.segment_number, length)
            remaining -= length
