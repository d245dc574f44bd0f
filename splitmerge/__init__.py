from .errors   import (CleanupWarning, FingerprintMismatch, IncompleteWrite,
                       MalformedHeader, MissingSegment, SegmentOrderMismatch,
                       SizeMismatch, SourceUnreadable, SplitMergeError,
                       UnsupportedFormat)
from .header   import SegmentHeader
from .merger   import MergeResult, merge_file
from .splitter import SplitResult, split_file

__all__ = ["split_file", "merge_file", "SplitResult", "MergeResult", "SegmentHeader",
           "SplitMergeError", "SourceUnreadable", "IncompleteWrite", "MalformedHeader",
           "UnsupportedFormat", "SegmentOrderMismatch", "MissingSegment", "SizeMismatch",
           "FingerprintMismatch", "CleanupWarning"]
