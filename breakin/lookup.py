"""
Lookup list loading for the break-in detector.

Both the banned IP list and the authorized user list are flat text files of
whitespace-separated tokens. Each is loaded once, before any log line is
scanned.
"""

import logging
from typing import FrozenSet

logger = logging.getLogger(__name__)


class LookupLoadError(RuntimeError):
    """Raised when a lookup list cannot be opened or read."""


def load_lookup(file_path: str) -> FrozenSet[str]:
    """
    Load every distinct token from a lookup file.

    Args:
        file_path: Path to the lookup file (e.g. banned_ips.txt)

    Returns:
        frozenset of tokens; order and duplicates in the file do not matter

    Raises:
        LookupLoadError: If the file cannot be opened or read
    """
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            tokens = frozenset(f.read().split())
    except (OSError, UnicodeDecodeError) as e:
        raise LookupLoadError(f"Error opening file {file_path}: {e}") from e

    logger.info(f"Loaded {len(tokens)} entries from {file_path}")
    return tokens
