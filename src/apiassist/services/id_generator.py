"""Prefixed ID generation utility."""

import itertools
import time
import uuid

_sequence = itertools.count(1)


def generate_id(prefix: str) -> str:
    """Generate a prefixed ID unique within this process.

    The process sequence number guarantees no two calls collide. The uuid
    suffix keeps IDs from different runs apart.

    Returns:
        A string like "act_1739999999123_7_9f1c2a4b0d3e5f61".
    """
    millis = int(time.time() * 1000)
    return f"{prefix}{millis}_{next(_sequence)}_{uuid.uuid4().hex[:16]}"
