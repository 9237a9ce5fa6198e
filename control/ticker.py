#!/usr/bin/env python3
"""
control/ticker.py
=================
Periodic schedulers that drive the controller's tick.

* :class:`ThreadTicker` - background thread firing at a fixed period.
* :class:`ManualTicker` - fires only when told to; used by tests and
  scripted scenarios so ticks run synchronously without wall-clock delay.

Both call their callback from one thread at a time, so ticks never
overlap.
"""

from __future__ import annotations

import logging
import threading
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional

log = logging.getLogger("controller")

TickCallback = Callable[[], None]


class Ticker(ABC):
    """Interface: ``start(callback)`` begins firing, ``stop()`` ends it."""

    @abstractmethod
    def start(self, callback: TickCallback) -> None:
        ...

    @abstractmethod
    def stop(self) -> None:
        ...

    @property
    @abstractmethod
    def active(self) -> bool:
        ...


class ThreadTicker(Ticker):
    """Calls the callback every *period_s* seconds on a daemon thread.

    A failing callback is logged and the loop carries on; only
    :meth:`stop` ends it.

    Parameters
    ----------
    period_s : float
        Seconds between ticks.
    name : str
        Thread name (shows up in log records and debuggers).
    """

    def __init__(self, period_s: float = 1.0, name: str = "SignalTicker") -> None:
        if period_s <= 0:
            raise ValueError("period_s must be positive")
        self._period_s = period_s
        self._name = name
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._lock = threading.Lock()

    @property
    def active(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive()

    def start(self, callback: TickCallback) -> None:
        """Spawn the background thread (no-op if already running)."""
        with self._lock:
            if self.active:
                return
            # Each run gets its own event; a thread that outlived a timed-out
            # join keeps seeing its event set and exits.
            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._loop,
                args=(callback, self._stop_event),
                daemon=True,
                name=self._name,
            )
            self._thread.start()
        log.info("%s started at %.2f s period", self._name, self._period_s)

    def stop(self) -> None:
        """Signal the thread to stop and wait for it to join."""
        with self._lock:
            self._stop_event.set()
            thread, self._thread = self._thread, None
        if thread and thread is not threading.current_thread():
            thread.join(timeout=2.0 * self._period_s + 1.0)
            if thread.is_alive():
                log.warning("%s did not stop within the join timeout", self._name)
        log.info("%s stopped", self._name)

    def _loop(self, callback: TickCallback, stop_event: threading.Event) -> None:
        while not stop_event.is_set():
            t0 = time.perf_counter()
            try:
                callback()
            except Exception:
                log.exception("%s tick error", self._name)
            remaining = max(0.0, self._period_s - (time.perf_counter() - t0))
            stop_event.wait(remaining)


class ManualTicker(Ticker):
    """Ticker advanced explicitly with :meth:`fire`."""

    def __init__(self) -> None:
        self._callback: Optional[TickCallback] = None

    @property
    def active(self) -> bool:
        return self._callback is not None

    def start(self, callback: TickCallback) -> None:
        self._callback = callback

    def stop(self) -> None:
        self._callback = None

    def fire(self, count: int = 1) -> int:
        """Run up to *count* ticks; returns how many actually ran."""
        fired = 0
        for _ in range(count):
            if self._callback is None:
                break
            self._callback()
            fired += 1
        return fired
