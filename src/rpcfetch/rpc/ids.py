"""Correlation identifier generation.

Identifiers are ULIDs: 48 bits of millisecond timestamp followed by 80 bits
of randomness, rendered as 26 Crockford base32 characters. Lexicographic
order matches issue order, also within a single millisecond.
"""

from __future__ import annotations

import os
import threading
import time
from collections.abc import Callable

_CROCKFORD = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"
_TIME_CHARS = 10
_RANDOM_CHARS = 16
_RANDOM_BITS = 80
_MAX_TIMESTAMP = (1 << 48) - 1


def _encode(value: int, length: int) -> str:
    chars = []
    for _ in range(length):
        value, index = divmod(value, 32)
        chars.append(_CROCKFORD[index])
    return "".join(reversed(chars))


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class UlidGenerator:
    """Monotonic ULID generator.

    When two ids fall in the same millisecond (or the clock steps back) the
    random part of the previous id is incremented instead of redrawn.
    """

    def __init__(
        self,
        clock: Callable[[], int] = _now_ms,
        entropy: Callable[[int], bytes] = os.urandom,
    ) -> None:
        self._clock = clock
        self._entropy = entropy
        self._lock = threading.Lock()
        self._last_ms = -1
        self._last_random = 0

    def _fresh_random(self) -> int:
        return int.from_bytes(self._entropy(_RANDOM_BITS // 8), "big")

    def new(self) -> str:
        timestamp = self._clock()
        with self._lock:
            if timestamp <= self._last_ms:
                timestamp = self._last_ms
                random = self._last_random + 1
                if random >> _RANDOM_BITS:
                    timestamp += 1
                    random = self._fresh_random()
            else:
                random = self._fresh_random()

            if timestamp > _MAX_TIMESTAMP:
                raise OverflowError("ULID timestamp out of range")

            self._last_ms = timestamp
            self._last_random = random

        return _encode(timestamp, _TIME_CHARS) + _encode(random, _RANDOM_CHARS)


_default_generator = UlidGenerator()


def new_request_id() -> str:
    """Return a fresh, sortable request identifier."""
    return _default_generator.new()


__all__ = [
    "UlidGenerator",
    "new_request_id",
]
