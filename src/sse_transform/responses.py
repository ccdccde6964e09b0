import asyncio
from collections.abc import AsyncGenerator
from collections.abc import AsyncIterable
from collections.abc import AsyncIterator
from typing import Final

from starlette.responses import StreamingResponse

from sse_transform.types.record import Record

SSE_MEDIA_TYPE: Final = "text/event-stream"

SSE_HEADERS: Final = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",  # If behind nginx, prevents buffering.
}


def sse_response(chunks: AsyncIterable[str]) -> StreamingResponse:
    async def _generate() -> AsyncIterator[bytes]:
        async for chunk in chunks:
            # Empty chunks are forwarded as well.
            yield chunk.encode("utf-8")

    return StreamingResponse(_generate(), media_type=SSE_MEDIA_TYPE, headers=SSE_HEADERS)


async def keep_alive_records(interval_seconds: float, comment: str = "keep-alive") -> AsyncGenerator[Record]:
    while True:
        await asyncio.sleep(interval_seconds)
        yield Record(comment=comment)
