"""A token pool that bounds how many workers run at once."""

from __future__ import annotations

import threading
from typing import Optional


class Pool:
    """Hands out at most ``size`` tokens; a negative size makes every call a no-op.

    With size 0 a token is handed straight from ``wait`` to ``done``, so each
    call blocks until the other side arrives.
    """

    def __init__(self, size: int) -> None:
        self._capacity: Optional[int] = size if size >= 0 else None
        self._cond = threading.Condition()
        self._tokens = 0
        self._outstanding = 0
        self._waiting = 0
        self._issued = 0
        self._admitted = 0

    def wait(self) -> None:
        """Take a token, blocking while none is free."""
        if self._capacity is None:
            return
        with self._cond:
            self._outstanding += 1
            if self._waiting == 0 and self._tokens < self._capacity:
                self._tokens += 1
                self._cond.notify_all()
                return
            ticket = self._issued
            self._issued += 1
            self._waiting += 1
            self._cond.notify_all()
            while ticket >= self._admitted:
                self._cond.wait()

    def done(self) -> None:
        """Return a token, blocking until one has been taken."""
        if self._capacity is None:
            return
        with self._cond:
            while self._tokens == 0 and self._waiting == 0:
                self._cond.wait()
            if self._tokens > 0:
                self._tokens -= 1
                if self._waiting:
                    self._waiting -= 1
                    self._admitted += 1
                    self._tokens += 1
            else:
                self._waiting -= 1
                self._admitted += 1
            self._outstanding -= 1
            self._cond.notify_all()

    def num(self) -> int:
        """Return the number of tokens currently held."""
        if self._capacity is None:
            return 0
        with self._cond:
            return self._tokens

    def size(self) -> int:
        """Return the total number of tokens."""
        return self._capacity if self._capacity is not None else 0

    def wait_all(self) -> None:
        """Block until every token taken has been returned."""
        with self._cond:
            while self._outstanding > 0:
                self._cond.wait()

    def async_wait_all(self) -> threading.Event:
        """Return an event that is set once every token has been returned."""
        event = threading.Event()

        def watch() -> None:
            self.wait_all()
            event.set()

        threading.Thread(target=watch, daemon=True).start()
        return event


def new_pool(size: int) -> Pool:
    """Return a pool of ``size`` tokens."""
    return Pool(size)