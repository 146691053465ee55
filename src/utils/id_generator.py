"""
Identifier generation for attribute groups, attributes and staged variants.

Ids combine a prefix, a strictly increasing nanosecond stamp and random
entropy, so ids produced in a tight loop never collide and ids from two
generators collide only with negligible probability.
"""

import secrets
import threading
import time
from typing import Callable, Optional


class IdGenerator:
    """Monotonic, high-entropy id source passed explicitly to the engines."""

    def __init__(
        self,
        clock: Optional[Callable[[], int]] = None,
        entropy_bytes: int = 6,
    ):
        self._clock = clock or time.time_ns
        self._entropy_bytes = entropy_bytes
        self._last_stamp = 0
        self._lock = threading.Lock()

    def _next_stamp(self) -> int:
        with self._lock:
            stamp = self._clock()
            if stamp <= self._last_stamp:
                stamp = self._last_stamp + 1
            self._last_stamp = stamp
            return stamp

    def new_id(self, prefix: str) -> str:
        """Return ``<prefix>_<stamp base36>_<random hex>``."""
        stamp = _to_base36(self._next_stamp())
        return f"{prefix}_{stamp}_{secrets.token_hex(self._entropy_bytes)}"

    def group_id(self) -> str:
        return self.new_id("group")

    def attribute_id(self, field_type: Optional[str] = None) -> str:
        return self.new_id(f"{field_type}" if field_type else "attr")

    def variant_key(self) -> str:
        return self.new_id("temp")


_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_ALPHABET[remainder])
    return "".join(reversed(digits))


default_id_generator = IdGenerator()
