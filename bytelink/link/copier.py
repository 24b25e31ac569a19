from typing import Callable, NamedTuple, Optional

from bytelink.link.endpoint import Buffer, Destination, Source, resolve
from bytelink.link.errors import CopyCancelledError, ShortWriteError

DEFAULT_BUFFER_SIZE = 1024

Transform = Callable[[memoryview], bytes]


class TransferResult(NamedTuple):
    written: int
    error: Optional[BaseException] = None


def _new_view(buffer: Optional[Buffer]) -> memoryview:
    if buffer is None:
        buffer = bytearray(DEFAULT_BUFFER_SIZE)
    view = memoryview(buffer).cast("B")
    if view.readonly:
        raise ValueError("buffer must be writable")
    if not len(view):
        raise ValueError("buffer must not be empty")
    return view


async def _read_chunk(source: Source, view: memoryview) -> Optional[memoryview]:
    """Read one chunk, returning ``None`` when nothing was available."""
    readinto = getattr(source, "readinto", None)
    if readinto is not None:
        n = await resolve(readinto(view))
        if n is None:
            return None
        return view[:n]

    # read() hands back a fresh chunk, so the buffer only bounds its size
    data = await resolve(source.read(len(view)))
    if data is None:
        return None
    return memoryview(data)


async def _write_chunk(destination: Destination, chunk) -> int:
    n = await resolve(destination.write(chunk))
    drain = getattr(destination, "drain", None)
    if drain is not None:
        await resolve(drain())
    return len(chunk) if n is None else n


def _is_cancelled(cancel) -> bool:
    return cancel is not None and cancel.is_set()


async def copy_one_way(
    cancel, source: Source, destination: Destination, transform: Optional[Transform] = None
) -> TransferResult:
    return await copy_one_way_spec(cancel, source, destination, None, transform)


async def copy_one_way_spec(
    cancel,
    source: Source,
    destination: Destination,
    buffer: Optional[Buffer] = None,
    transform: Optional[Transform] = None,
) -> TransferResult:
    """Copy from ``source`` to ``destination`` until end of input or an error.

    Chunks of at most ``len(buffer)`` bytes (``DEFAULT_BUFFER_SIZE`` when not
    given) are read, into ``buffer`` when the source has ``readinto``. Each
    chunk is passed through ``transform`` as a read-only view and written out
    before the next read. ``cancel`` is an ``asyncio.Event`` (or anything
    with ``is_set()``) consulted after each read; once set, the copy stops
    with ``CopyCancelledError`` and the chunk just read is dropped.

    Returns the number of bytes written and the error that stopped the copy,
    ``None`` for a clean end of input. Neither endpoint is closed.
    """
    view = _new_view(buffer)
    written = 0

    while True:
        try:
            chunk = await _read_chunk(source, view)
        except Exception as e:
            return TransferResult(written, e)

        if _is_cancelled(cancel):
            return TransferResult(written, CopyCancelledError())

        if chunk is None:
            continue
        if not len(chunk):
            return TransferResult(written)

        data = chunk.toreadonly()
        if transform is not None:
            data = transform(data)

        try:
            n = await _write_chunk(destination, data)
        except Exception as e:
            written += getattr(e, "characters_written", 0)
            return TransferResult(written, e)

        if n > 0:
            written += n
        if n < len(data):
            return TransferResult(written, ShortWriteError(len(data), n))
