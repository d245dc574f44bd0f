# ==================================================
# splitmerge/merger.py
# ==================================================
import logging, os
from dataclasses import dataclass, field
from typing import BinaryIO, List, Optional

from .cleanup import discard, discard_all
from .const   import BUFFER_SIZE, FORMAT_VERSION
from .errors  import (CleanupWarning, FingerprintMismatch, MissingSegment,
                      SegmentOrderMismatch, SizeMismatch, SourceUnreadable,
                      UnsupportedFormat)
from .hasher  import fingerprint_file
from .header  import SegmentHeader, read_header
from .naming  import segment_path, series_base

log = logging.getLogger(__name__)


@dataclass
class MergeResult:
    destination: str
    file_size:   int = 0
    segments:    List[str] = field(default_factory=list)
    warnings:    List[CleanupWarning] = field(default_factory=list)


# ── helpers ───────────────────────────────────────────────────
def _open_segment(seg_path: str) -> BinaryIO:
    try:
        return open(seg_path, "rb")
    except FileNotFoundError as e:
        raise MissingSegment(seg_path, f"segment file {seg_path} is missing") from e
    except OSError as e:
        raise SourceUnreadable(seg_path, f"cannot open segment file {seg_path}: {e.strerror}") from e


def _check(header: SegmentHeader, index: int, seg_path: str):
    if header.format_version != FORMAT_VERSION:
        raise UnsupportedFormat(seg_path, f"cannot process segment file {seg_path}: unsupported"
                                          f" format version {header.format_version}")
    if header.segment_number != index + 1:
        raise SegmentOrderMismatch(seg_path, index + 1, header.segment_number)


def _copy_rest(src: BinaryIO, dst: BinaryIO, bufsize: int = BUFFER_SIZE) -> int:
    n = 0
    while data := src.read(bufsize):
        dst.write(data)
        n += len(data)
    return n


# ── public api ────────────────────────────────────────────────
def merge_file(path, keep: bool = False) -> MergeResult:
    """
    Rebuild the original file from the series `path` belongs to.

    Any member may be named (`x.seg0003` works as well as `x.seg0000`); the
    series is always read from `.seg0000` upward until the size recorded in
    the first header has been reached. The result is then hashed and compared
    with the recorded fingerprint.

    On failure the partial destination is deleted and the segments are left
    in place so the merge can be retried.
    """
    base = series_base(path)
    result = MergeResult(base)

    dest: Optional[BinaryIO] = None
    try:
        expected: Optional[SegmentHeader] = None
        written = 0
        index = 0
        while True:
            seg_path = segment_path(base, index)
            with _open_segment(seg_path) as seg:
                header = read_header(seg, seg_path)
                _check(header, index, seg_path)
                if expected is None:
                    expected = header
                    dest = open(base, "wb")
                written += _copy_rest(seg, dest)
            result.segments.append(seg_path)
            log.debug("merged %s (%d of %d bytes)", seg_path, written, expected.file_size)

            index += 1
            if written >= expected.file_size:
                break

        dest.close()
        if written != expected.file_size:
            raise SizeMismatch(base, expected.file_size, written)
        if fingerprint_file(base) != expected.fingerprint:
            raise FingerprintMismatch(base, f"file hash/fingerprint of {base} does not match"
                                            f" the one recorded in the segments")
    except BaseException:
        if dest is not None:
            dest.close()
            discard(base)
            log.info("Clean-Up: destination file (damaged) %s has been deleted.", base)
        raise

    result.file_size = expected.file_size
    log.info("OK merge/reconstruct: %s @ %d bytes <-- %d segment files.",
             base, result.file_size, len(result.segments))

    if not keep:
        result.warnings = discard_all(result.segments)
        if not result.warnings:
            log.info("Clean-Up: all segment files of %s have been deleted.", base)
    return result
