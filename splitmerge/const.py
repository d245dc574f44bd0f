# ==================================================
# splitmerge/const.py
# ==================================================
FORMAT_VERSION = 1               # only supported segment format
HEADER_FMT = "<iiQ32s"           # format_version (i), segment_number (i), file_size (Q), fingerprint (32s)
HEADER_FIELDS_SIZE = 4+4+8+32    # 48 bytes of metadata
HEADER_SIZE = 256                # metadata + zero-filled reserved block
RESERVED_SIZE = HEADER_SIZE - HEADER_FIELDS_SIZE
FINGERPRINT_SIZE = 32            # BLAKE3 default output length

SEGMENT_EXT = ".seg"
SEGMENT_DIGITS = 4               # .seg0000, .seg0001, ...

DEFAULT_SEGMENT_SIZE = 15_000_000
BUFFER_SIZE = 65536              # scratch size for streaming copies / hashing

UNITS = {"B": 1, "K": 1024, "M": 1024 * 1024}
