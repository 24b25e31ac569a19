import asyncio
from asyncio import StreamReader


def create_stream_reader_from_bytes(data: bytes, delay: float = 0.01) -> StreamReader:
    r = StreamReader()

    async def feed():
        await asyncio.sleep(delay)
        r.feed_data(data)
        r.feed_eof()

    loop = asyncio.get_event_loop()
    loop.create_task(feed())

    return r


def create_stream_reader_from_file(file: str) -> StreamReader:
    with open(file, "rb") as f:
        return create_stream_reader_from_bytes(f.read())
