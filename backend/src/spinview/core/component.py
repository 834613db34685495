from __future__ import annotations

import threading
import time
from abc import ABC, abstractmethod
from enum import Enum

from pydantic import BaseModel


class ComponentSnapshot(BaseModel):
    name: str
    status: str
    started_at: float | None


class Status(Enum):
    STARTUP = "startup"
    RUNNING = "running"
    STOPPED = "stopped"


class Component(ABC):
    """A unit of work that runs on its own daemon thread until stopped.

    Every start() gets a fresh stop event, so a thread left over from a
    previous run can never be revived by a later start().
    """

    def __init__(self) -> None:
        self.name: str = type(self).__name__
        self._status = Status.STARTUP
        self._started_at: float | None = None
        self._thread: threading.Thread | None = None
        self._stop_event = threading.Event()
        self._state_lock = threading.Lock()

    @property
    def status(self) -> Status:
        return self._status

    @property
    def is_running(self) -> bool:
        return self._status == Status.RUNNING

    @property
    def stop_event(self) -> threading.Event:
        return self._stop_event

    @abstractmethod
    def run(self, stop_event: threading.Event) -> None:
        ...

    def _safe_run(self, stop_event: threading.Event) -> None:
        try:
            self.run(stop_event)
        finally:
            with self._state_lock:
                if stop_event is self._stop_event:
                    self._status = Status.STOPPED

    def start(self) -> None:
        with self._state_lock:
            if self._status == Status.RUNNING:
                return
            self._stop_event = threading.Event()
            self._status = Status.RUNNING
            self._started_at = time.time()
            self._thread = threading.Thread(target=self._safe_run, args=(self._stop_event,), daemon=True, name=self.name)
            self._thread.start()

    def stop(self) -> None:
        """
        Idempotent.
        Sets the current run's stop event and marks the component stopped right away;
        run() is expected to notice the event and return cooperatively.
        """
        with self._state_lock:
            if self._status != Status.RUNNING:
                return
            self._stop_event.set()
            self._status = Status.STOPPED

    def join(self, timeout: float | None = None) -> None:
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    def snapshot(self) -> ComponentSnapshot:
        return ComponentSnapshot(
            name=self.name,
            status=self.status.value,
            started_at=self._started_at,
        )
