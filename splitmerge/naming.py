# ==================================================
# splitmerge/naming.py
# ==================================================
import os, re

from .const import SEGMENT_DIGITS, SEGMENT_EXT

# ".seg" + at least four digits, any case: .seg0000, .SEG0003, .seg123456789
_SEGMENT_EXT_RE = re.compile(rf"^{re.escape(SEGMENT_EXT)}\d{{{SEGMENT_DIGITS},}}$", re.IGNORECASE)


def segment_path(base: str, index: int) -> str:
    return f"{base}{SEGMENT_EXT}{index:0{SEGMENT_DIGITS}d}"


def segment_extension(path) -> str:
    name = os.path.basename(os.fspath(path))
    dot = name.rfind(".")
    return name[dot:] if dot > 0 else ""


def is_segment_path(path) -> bool:
    """True when `path` names any member of a segment series."""
    return bool(_SEGMENT_EXT_RE.match(segment_extension(path)))


def series_base(path) -> str:
    """Original file path for a segment path: its .segNNNN extension stripped."""
    path = os.fspath(path)
    if not is_segment_path(path):
        raise ValueError(f"{path} is not a segment file name")
    return path[:-len(segment_extension(path))]
