from collections.abc import AsyncIterator
from typing import Final

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from sse_transform.responses import SSE_MEDIA_TYPE
from sse_transform.responses import keep_alive_records
from sse_transform.responses import sse_response
from sse_transform.types.record import Record


def test_sse_response_streams_chunks_with_event_stream_headers() -> None:
    app: Final = FastAPI()

    @app.get("/stream")
    async def _stream():  # pyright: ignore[reportUnusedFunction]
        async def _chunks() -> AsyncIterator[str]:
            yield "data:ä\n\n"
            yield ""
            yield ":ping\n\n"

        return sse_response(_chunks())

    response: Final = TestClient(app).get("/stream")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith(SSE_MEDIA_TYPE)
    assert response.headers["cache-control"] == "no-cache"
    assert response.content.decode("utf-8") == "data:ä\n\n:ping\n\n"


@pytest.mark.asyncio
async def test_keep_alive_records_yield_comment_records() -> None:
    records: Final = keep_alive_records(0.001, comment="ping")
    assert await anext(records) == Record(comment="ping")
    assert await anext(records) == Record(comment="ping")
    await records.aclose()
