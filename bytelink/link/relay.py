import asyncio
from typing import NamedTuple, Optional

from bytelink.link.copier import Transform, copy_one_way_spec
from bytelink.link.endpoint import Buffer, DuplexEndpoint, resolve


class RelayResult(NamedTuple):
    written1: int
    written2: int
    error1: Optional[BaseException] = None
    error2: Optional[BaseException] = None


async def close_both(first: DuplexEndpoint, second: DuplexEndpoint) -> None:
    try:
        await resolve(first.close())
    finally:
        await resolve(second.close())


async def relay_two_way(
    cancel,
    endpoint1: DuplexEndpoint,
    endpoint2: DuplexEndpoint,
    transform1: Optional[Transform] = None,
    transform2: Optional[Transform] = None,
) -> RelayResult:
    return await relay_two_way_spec(
        cancel, endpoint1, endpoint2, None, None, transform1, transform2
    )


async def relay_two_way_spec(
    cancel,
    endpoint1: DuplexEndpoint,
    endpoint2: DuplexEndpoint,
    buffer1: Optional[Buffer] = None,
    buffer2: Optional[Buffer] = None,
    transform1: Optional[Transform] = None,
    transform2: Optional[Transform] = None,
) -> RelayResult:
    """Relay between two endpoints until either direction stops.

    ``endpoint1 -> endpoint2`` runs in a background task and
    ``endpoint2 -> endpoint1`` in the calling task. Whichever ends first
    closes both endpoints, which brings the other one down too. Returns once
    both directions have stopped, with each direction's byte count and error.
    """
    done = asyncio.Event()

    async def forward():
        try:
            return await copy_one_way_spec(
                cancel, endpoint1, endpoint2, buffer1, transform1
            )
        finally:
            try:
                await close_both(endpoint1, endpoint2)
            finally:
                done.set()

    loop = asyncio.get_event_loop()
    task = loop.create_task(forward())
    try:
        try:
            written2, error2 = await copy_one_way_spec(
                cancel, endpoint2, endpoint1, buffer2, transform2
            )
        finally:
            await close_both(endpoint2, endpoint1)
        await done.wait()
    except BaseException:
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        raise

    written1, error1 = task.result()
    return RelayResult(written1, written2, error1, error2)
