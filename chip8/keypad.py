"""Hex keypad latch and the blocking key-wait state."""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Optional

from .errors import InvalidKey


logger = logging.getLogger(__name__)

KEY_COUNT = 16


def check_key(key: int) -> None:
    """Reject values outside the 0x0-0xF keypad range."""
    if not 0 <= key < KEY_COUNT:
        raise InvalidKey(f"Key out of range: {key}")


class Keypad:
    """16 pressed/released flags plus an optional register awaiting a key."""

    def __init__(self):
        self._pressed = [False] * KEY_COUNT
        self.waiting_register: Optional[int] = None

    @property
    def waiting(self) -> bool:
        return self.waiting_register is not None

    def is_pressed(self, key: int) -> bool:
        check_key(key)
        return self._pressed[key]

    def wait_for_key(self, register: int) -> None:
        """Enter the blocking wait, targeting register `register`."""
        self.waiting_register = register
        logger.debug("waiting for key into V%X", register)

    def press(self, key: int) -> Optional[int]:
        """Latch `key` as pressed.

        Returns:
            The register index whose wait this press resolved, or None
        """
        check_key(key)
        self._pressed[key] = True
        register = self.waiting_register
        if register is not None:
            self.waiting_register = None
            logger.debug("key %X resolved wait on V%X", key, register)
        return register

    def release(self, key: int) -> None:
        """Latch `key` as released. Never affects the wait state."""
        check_key(key)
        self._pressed[key] = False

    def get_state(self) -> dict:
        return {
            "pressed": [k for k in range(KEY_COUNT) if self._pressed[k]],
            "waiting_register": self.waiting_register,
        }

    def reset(self) -> None:
        self._pressed = [False] * KEY_COUNT
        self.waiting_register = None


@dataclass(frozen=True)
class KeyTransition:
    key: int
    pressed: bool


class KeyEventQueue:
    """Key transitions recorded by a host, applied between cycles.

    Event callbacks push into the queue; the code that owns the
    interpreter drains it before stepping.
    """

    def __init__(self):
        self._events: deque[KeyTransition] = deque()

    def __len__(self) -> int:
        return len(self._events)

    def push(self, key: int, pressed: bool) -> None:
        check_key(key)
        self._events.append(KeyTransition(key, pressed))

    def key_down(self, key: int) -> None:
        self.push(key, True)

    def key_up(self, key: int) -> None:
        self.push(key, False)

    def drain_into(self, interpreter) -> int:
        """Apply queued transitions in order; return how many were applied."""
        count = 0
        while self._events:
            event = self._events.popleft()
            if event.pressed:
                interpreter.key_down(event.key)
            else:
                interpreter.key_up(event.key)
            count += 1
        return count
