# ==================================================
# splitmerge/cleanup.py
# ==================================================
import logging, os
from typing import Iterable, List, Optional

from .errors import CleanupWarning

log = logging.getLogger(__name__)


def discard(path) -> Optional[CleanupWarning]:
    """Best-effort delete. Never raises; a failure comes back as a warning."""
    try:
        os.remove(path)
    except FileNotFoundError:
        return None
    except OSError as e:
        warning = CleanupWarning(path, e.strerror or e)
        log.warning("Error reported while attempting to delete %s: %s", path, warning.reason)
        return warning
    log.debug("deleted %s", path)
    return None


def discard_all(paths: Iterable) -> List[CleanupWarning]:
    return [w for w in map(discard, paths) if w is not None]
