import logging
from asyncio import StreamReader, StreamWriter
from typing import Optional, Tuple

import async_timeout

from bytelink.link.copier import Transform
from bytelink.link.endpoint import StreamEndpoint
from bytelink.link.relay import RelayResult, close_both, relay_two_way

logger = logging.getLogger(__name__)

StreamPair = Tuple[StreamReader, StreamWriter]


def log_direction(name: str, written: int, error: Optional[BaseException]):
    if error is None:
        logger.debug(f"{name}: {written} bytes, end of input")
    else:
        logger.warning(f"{name}: {written} bytes, stopped by {error!r}")


async def relay_stream(
    local_stream: StreamPair,
    remote_stream: StreamPair,
    *,
    local_transform: Optional[Transform] = None,
    remote_transform: Optional[Transform] = None,
    timeout: Optional[float] = None,
    cancel=None,
) -> RelayResult:
    """Relay between two connected stream pairs until either side is done.

    ``local_transform`` applies to bytes going from local to remote,
    ``remote_transform`` to bytes coming back. With ``timeout`` the whole
    relay is bounded and ``asyncio.TimeoutError`` is raised on expiry.
    """
    local = StreamEndpoint(*local_stream)
    remote = StreamEndpoint(*remote_stream)
    logger.debug(f"Relaying {local.peername()!r} <-> {remote.peername()!r}")

    try:
        async with async_timeout.timeout(timeout):
            result = await relay_two_way(
                cancel, local, remote, local_transform, remote_transform
            )
    finally:
        await close_both(local, remote)
        await local.wait_closed()
        await remote.wait_closed()

    log_direction("local -> remote", result.written1, result.error1)
    log_direction("remote -> local", result.written2, result.error2)
    return result
