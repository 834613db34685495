from __future__ import annotations

import itertools
import secrets
import threading
import time

_counter = itertools.count(1)
_counter_lock = threading.Lock()


def obj_id() -> int:
    """Process-wide monotonically increasing id for events."""
    with _counter_lock:
        return next(_counter)


def uid() -> str:
    """Short unique string id: base36 millisecond timestamp plus a random suffix."""
    return _base36(time.time_ns() // 1_000_000) + secrets.token_hex(5)


def _base36(value: int) -> str:
    digits = "0123456789abcdefghijklmnopqrstuvwxyz"
    if value == 0:
        return "0"
    out = []
    while value:
        value, rem = divmod(value, 36)
        out.append(digits[rem])
    return "".join(reversed(out))
