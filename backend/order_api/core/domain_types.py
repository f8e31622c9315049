"""Domain Types — identifiers and caller identity shared across the codebase.

Invariants:
    - DocumentId is a 24-char lowercase hex string (12 bytes: time + random + counter)
    - is_valid_object_id() accepts 24 hex chars in either case; normalize_object_id()
      lowers them, so one id never names two documents
    - A caller id is at most MAX_USER_ID_LENGTH characters (the width of addedBy/updatedBy)
    - CallerIdentity is immutable once resolved for a request

Design Decisions:
    - NewType over wrapper classes: ids travel through JSON documents as plain str
"""

import itertools
import os
import re
import time
from dataclasses import dataclass
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

DocumentId = NewType("DocumentId", str)
UserId = NewType("UserId", str)

OBJECT_ID_PATTERN = r"^[0-9a-fA-F]{24}$"
_OBJECT_ID_RE = re.compile(OBJECT_ID_PATTERN)

MAX_USER_ID_LENGTH = 64

# 5 bytes fixed per process, 3-byte counter seeded randomly
_PROCESS_UNIQUE = os.urandom(5)
_counter = itertools.count(int.from_bytes(os.urandom(3), "big"))


def new_object_id() -> DocumentId:
    """Generate a 24-hex identifier ordered by creation second."""
    timestamp = int(time.time()) & 0xFFFFFFFF
    count = next(_counter) & 0xFFFFFF
    raw = (
        timestamp.to_bytes(4, "big")
        + _PROCESS_UNIQUE
        + count.to_bytes(3, "big")
    )
    return DocumentId(raw.hex())


def is_valid_object_id(value: object) -> bool:
    """True only for a 24-character hexadecimal string."""
    return isinstance(value, str) and bool(_OBJECT_ID_RE.fullmatch(value))


def normalize_object_id(value):
    """Lowercase an id string; anything else passes through untouched."""
    return value.lower() if isinstance(value, str) else value


@dataclass(frozen=True)
class CallerIdentity:
    """Authenticated caller, resolved once per request."""
    id: UserId
