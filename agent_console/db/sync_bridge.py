"""
Async-to-sync bridge for DB-backed stores.
Sync callers hand coroutines to one long-lived event loop running on a daemon
thread, so driver connections (and aiosqlite's worker threads) always report
back to a loop that is still open.
"""
import asyncio
import threading
from typing import Any, Coroutine, TypeVar

T = TypeVar("T")


class BackgroundLoop:
    """Event loop on its own thread that synchronous code can submit coroutines to."""

    def __init__(self, name: str = "db-bridge"):
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self._loop.run_forever, name=name, daemon=True)
        self._thread.start()

    @property
    def closed(self) -> bool:
        return self._loop.is_closed()

    def run(self, coro: Coroutine[Any, Any, T]) -> T:
        """
        Run ``coro`` on the background loop and block until it finishes.
        Works from plain threads and from inside another running event loop;
        must not be called from the background loop's own thread.
        """
        if self._loop.is_closed():
            coro.close()
            raise RuntimeError("Background event loop is closed")
        if threading.current_thread() is self._thread:
            coro.close()
            raise RuntimeError("BackgroundLoop.run() called from its own loop thread")
        return asyncio.run_coroutine_threadsafe(coro, self._loop).result()

    def close(self) -> None:
        if self._loop.is_closed():
            return
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join()
        self._loop.close()
