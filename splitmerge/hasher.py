# ==================================================
# splitmerge/hasher.py
# ==================================================
import os
from typing import BinaryIO, Tuple

import blake3

from .const import BUFFER_SIZE, FINGERPRINT_SIZE


class Fingerprinter:
    """Streaming BLAKE3-256 accumulator."""
    def __init__(self):
        self._h = blake3.blake3()

    def update(self, data: bytes):
        self._h.update(data)

    def digest(self) -> bytes:
        return self._h.digest(length=FINGERPRINT_SIZE)


def fingerprint_stream(stream: BinaryIO, bufsize: int = BUFFER_SIZE) -> Tuple[bytes, int]:
    """Hash `stream` from its current position to EOF -> (digest, bytes hashed)."""
    fp = Fingerprinter()
    total = 0
    while data := stream.read(bufsize):
        fp.update(data)
        total += len(data)
    return fp.digest(), total


def fingerprint_file(path: str | os.PathLike) -> bytes:
    with open(path, "rb") as f:
        return fingerprint_stream(f)[0]
