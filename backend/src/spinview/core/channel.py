from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager

type Listener[T] = Callable[[T], None]


class Channel[T]:
    """Synchronous fan-out of items to subscribed listeners.

    `send()` calls every matching listener in subscription order before it
    returns. Listeners may subscribe or unsubscribe from inside a callback;
    the change applies from the next `send()`.
    """

    def __init__(self, *, name: str | None = None) -> None:
        self._lock = threading.RLock()
        self._listeners: dict[int, tuple[Listener[T], tuple[type, ...]]] = {}
        self._next_sub_id = 0
        self._closed = False
        self.name: str = name or f"channel_{id(self):x}"

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: Listener[T], *types: type) -> Callable[[], None]:
        """Register `listener` for items of `types` (all items if none given).

        Returns a callable that removes the subscription. Idempotent.
        """
        with self._lock:
            sub_id = self._next_sub_id
            self._next_sub_id += 1
            self._listeners[sub_id] = (listener, types)
        return lambda: self._unregister(sub_id)

    @contextmanager
    def listening(self, listener: Listener[T], *types: type) -> Iterator[None]:
        """Scoped subscription, removed on every exit path."""
        unsubscribe = self.subscribe(listener, *types)
        try:
            yield
        finally:
            unsubscribe()

    def send(self, item: T) -> None:
        with self._lock:
            if self._closed:
                return
            targets = [
                listener
                for listener, types in self._listeners.values()
                if not types or isinstance(item, types)
            ]
            for listener in targets:
                listener(item)

    def close(self) -> None:
        """Idempotent. Drops every subscription; later sends are ignored."""
        with self._lock:
            self._closed = True
            self._listeners.clear()

    def __len__(self) -> int:
        return len(self._listeners)

    def _unregister(self, sub_id: int) -> None:
        """Idempotent."""
        with self._lock:
            self._listeners.pop(sub_id, None)
