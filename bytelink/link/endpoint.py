import inspect
from asyncio import StreamReader, StreamWriter
from typing import Any, Optional, Protocol, Union

Buffer = Union[bytearray, memoryview]


class Source(Protocol):
    """Anything a chunk can be read from.

    The copier prefers ``readinto(buffer)`` and falls back to ``read(n)``.
    Either may return a value or an awaitable. ``0`` or ``b""`` is end of
    input, ``None`` means nothing is available yet.
    """

    def read(self, n: int) -> Any:
        ...


class Destination(Protocol):
    """Anything a chunk can be written to.

    ``write`` returns the number of bytes accepted, or ``None`` when it
    accepts the whole chunk. It must not keep a reference to ``data``.
    An optional ``drain()`` is awaited after every write.
    """

    def write(self, data: bytes) -> Any:
        ...


class DuplexEndpoint(Source, Destination, Protocol):
    """A source and a destination sharing one ``close()``.

    ``close`` is called by both directions of a relay, possibly at the same
    time, so it must be idempotent.
    """

    def close(self) -> Any:
        ...


async def resolve(result):
    if inspect.isawaitable(result):
        return await result
    return result


class StreamEndpoint:
    """Duplex endpoint over an asyncio ``(StreamReader, StreamWriter)`` pair."""

    def __init__(self, reader: StreamReader, writer: StreamWriter):
        self.reader = reader
        self.writer = writer
        self.closed = False

    async def read(self, n: int) -> bytes:
        return await self.reader.read(n)

    async def write(self, data) -> int:
        # the transport may buffer what it is given, so hand it a copy
        self.writer.write(bytes(data))
        await self.writer.drain()
        return len(data)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self.writer.close()
        # wake up a read pending on this endpoint
        self.reader.feed_eof()

    async def wait_closed(self) -> None:
        try:
            await self.writer.wait_closed()
        except (ConnectionError, OSError):
            pass

    def __repr__(self):
        return f"<StreamEndpoint peer={self.peername()!r} closed={self.closed}>"

    def peername(self) -> Optional[Any]:
        return self.writer.get_extra_info("peername")
