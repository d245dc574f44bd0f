# ==================================================
# splitmerge/cli.py
# ==================================================
import argparse, logging, re, sys

from .const    import DEFAULT_SEGMENT_SIZE, UNITS
from .errors   import SplitMergeError
from .merger   import merge_file
from .naming   import is_segment_path
from .splitter import split_file

log = logging.getLogger(__name__)

DESCRIPTION = """\
Split a file in smaller files or merge files into a larger one.

A split file is replaced by <file>.seg0000, <file>.seg0001, ... Every segment
starts with a 256-byte header recording the original file size and its BLAKE3
fingerprint, which is checked again when the segments are merged.

The default action is to SPLIT, unless the path has a .segNNNN extension, in
which case the series is MERGED (starting at .seg0000 whichever segment was
named).
"""

EPILOG = """\
examples:
  splitmerge largeFile.bin              -> largeFile.bin.seg0000, .seg0001, ...
  splitmerge -l 100M largeFile.bin      ditto, with 100 MiB segments
  splitmerge largeFile.bin.seg0000      rebuild largeFile.bin, delete segments
  splitmerge -k largeFile.bin.seg0000   rebuild largeFile.bin, keep segments
"""

_SIZE_RE = re.compile(r"^\s*(\d+)\s*([A-Za-z]*)\s*$")


def parse_size(text: str) -> int:
    """'42' -> 42, '42B' -> 42, '4k' -> 4096, '15M' -> 15 MiB."""
    m = _SIZE_RE.match(text)
    if not m:
        raise argparse.ArgumentTypeError(f"invalid segment size: {text!r}")
    value, unit = int(m.group(1)), m.group(2).upper()
    if unit and unit not in UNITS:
        raise argparse.ArgumentTypeError(f"segment size unit MUST be B, K or M; unsupported unit: {m.group(2)}")
    size = value * UNITS.get(unit, 1)
    if size <= 0:
        raise argparse.ArgumentTypeError("segment size must be larger than zero")
    return size


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="splitmerge", description=DESCRIPTION, epilog=EPILOG,
                                formatter_class=argparse.RawDescriptionHelpFormatter)
    p.add_argument("paths", nargs="+", metavar="PATH",
                   help="file to split, or any segment file of a series to merge")
    p.add_argument("-s", "--split", action="store_true",
                   help="force SPLIT, even for a path ending in .segNNNN")
    p.add_argument("-k", "--keep", action="store_true",
                   help="keep the source file (split) or the segment files (merge)")
    p.add_argument("-l", "--segment-size", type=parse_size, default=DEFAULT_SEGMENT_SIZE,
                   metavar="SIZE", help="segment size in bytes, or with a B/K/M suffix"
                                        f" (default: {DEFAULT_SEGMENT_SIZE})")
    verbosity = p.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="report every segment")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="only report problems")
    return p


DONE, SKIPPED, FAILED = "done", "skipped", "failed"


def process(path: str, args) -> str:
    """Split or merge a single path to completion; never raises for per-file failures."""
    merging = is_segment_path(path) and not args.split
    try:
        if merging:
            merge_file(path, keep=args.keep)
        elif split_file(path, args.segment_size, keep=args.keep).skipped:
            return SKIPPED
    except (SplitMergeError, OSError) as e:
        log.error("Failure while %s %s: %s", "merging" if merging else "splitting", path, e)
        return FAILED
    return DONE


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.WARNING if args.quiet else logging.INFO
    logging.basicConfig(format="%(message)s", stream=sys.stderr)
    logging.getLogger("splitmerge").setLevel(level)     # package parent of every module logger

    outcomes = [process(path, args) for path in args.paths]

    failed  = outcomes.count(FAILED)
    skipped = outcomes.count(SKIPPED)
    log.info("%d of %d path(s) processed successfully (%d skipped), %d failed.",
             len(outcomes) - failed, len(outcomes), skipped, failed)
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
