import asyncio
from contextlib import asynccontextmanager
from typing import Dict


class ResourceLocks:
    """Per-resource asyncio locks.

    Conflict checks are read-then-write against the store, so every
    check-and-insert for one room or one piece of equipment runs under the
    lock for that resource.
    """

    def __init__(self):
        self._locks: Dict[str, asyncio.Lock] = {}

    def _lock_for(self, key: str) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    @asynccontextmanager
    async def hold(self, kind: str, resource_id: str):
        lock = self._lock_for(f"{kind}:{resource_id}")
        async with lock:
            yield


resource_locks = ResourceLocks()
