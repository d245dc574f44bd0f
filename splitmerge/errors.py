# ==================================================
# splitmerge/errors.py
# ==================================================
class SplitMergeError(Exception):
    """Fatal failure while splitting or merging one path."""
    def __init__(self, path, message: str):
        super().__init__(message)
        self.path = str(path)


class SourceUnreadable(SplitMergeError):
    pass

class IncompleteWrite(SplitMergeError):
    pass

class MalformedHeader(SplitMergeError):
    pass

class UnsupportedFormat(SplitMergeError):
    pass

class MissingSegment(SplitMergeError):
    pass

class FingerprintMismatch(SplitMergeError):
    pass


class SegmentOrderMismatch(SplitMergeError):
    def __init__(self, path, expected: int, found: int):
        super().__init__(path, f"unexpected segment number {found} in {path}"
                               f" (expected segment number {expected})")
        self.expected = expected
        self.found    = found


class SizeMismatch(SplitMergeError):
    def __init__(self, path, expected: int, actual: int):
        super().__init__(path, f"reconstructed {path} holds {actual} bytes,"
                               f" the segment headers promise {expected}")
        self.expected = expected
        self.actual   = actual


class CleanupWarning(UserWarning):
    """Deleting a file failed; logged, never raised."""
    def __init__(self, path, reason):
        super().__init__(f"could not delete {path}: {reason}")
        self.path   = str(path)
        self.reason = reason
