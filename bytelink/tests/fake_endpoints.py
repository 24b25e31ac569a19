import asyncio
from typing import Optional


class ChunkSource:
    """Hands out ``chunks`` one per read, then raises ``error`` or ends."""

    def __init__(self, chunks, error: Optional[Exception] = None):
        self.chunks = list(chunks)
        self.error = error
        self.reads = 0

    async def read(self, n):
        self.reads += 1
        if self.chunks:
            return self.chunks.pop(0)
        if self.error is not None:
            raise self.error
        return b""


class RecordingDestination:
    """Records every write. ``accept`` caps how much one write takes."""

    def __init__(self, accept: Optional[int] = None, fail_at: Optional[int] = None,
                 error: Optional[Exception] = None):
        self.writes = []
        self.accept = accept
        self.fail_at = fail_at
        self.error = error

    def write(self, data):
        if self.fail_at is not None and len(self.writes) == self.fail_at:
            raise self.error
        data = bytes(data)
        if self.accept is not None:
            data = data[: self.accept]
        self.writes.append(data)
        return len(data)

    @property
    def data(self) -> bytes:
        return b"".join(self.writes)


class MemoryEndpoint:
    """In-memory duplex endpoint; closing it ends its pending reads."""

    def __init__(self, write_error: Optional[Exception] = None):
        self.inbox = asyncio.StreamReader()
        self.received = bytearray()
        self.write_error = write_error
        self.close_calls = 0

    def feed(self, data: bytes, eof: bool = False):
        self.inbox.feed_data(data)
        if eof:
            self.inbox.feed_eof()

    async def read(self, n):
        return await self.inbox.read(n)

    def write(self, data):
        if self.write_error is not None:
            raise self.write_error
        if self.close_calls:
            raise ConnectionResetError("endpoint closed")
        self.received += data
        return len(data)

    def close(self):
        self.close_calls += 1
        if not self.inbox.at_eof():
            self.inbox.feed_eof()
