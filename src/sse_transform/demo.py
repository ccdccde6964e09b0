import asyncio
import logging
from collections.abc import AsyncGenerator
from datetime import UTC
from datetime import datetime
from http import HTTPStatus
from typing import Any
from typing import Final
from typing import final

import uvicorn
from fastapi import FastAPI
from fastapi import HTTPException
from pydantic import BaseModel
from pydantic import ValidationError
from starlette.requests import Request
from starlette.responses import PlainTextResponse
from starlette.responses import StreamingResponse

from sse_transform.config import Config
from sse_transform.encoder import encode
from sse_transform.responses import SSE_MEDIA_TYPE
from sse_transform.responses import sse_response
from sse_transform.stream import SseTransform
from sse_transform.stream import SseTransformOptions
from sse_transform.types.field_map import field_map_from
from sse_transform.types.record import Record

logger: Final = logging.getLogger(__name__)


@final
class EncodeRequest(BaseModel):
    record: dict[str, Any]
    field_map: dict[str, str] = {}  # Custom field -> output field name.


def create_app(config: Config) -> FastAPI:
    app: Final = FastAPI()

    @app.get("/events")
    async def events(request: Request) -> StreamingResponse:  # pyright: ignore[reportUnusedFunction]
        async def _records() -> AsyncGenerator[Record]:
            yield Record(event="welcome", data="Connected to SSE server!")
            count = 0
            while config.max_updates is None or count < config.max_updates:
                await asyncio.sleep(config.ping_interval_seconds)
                if await request.is_disconnected():
                    logger.info("Client disconnected, closing event stream.")
                    return
                yield Record(id=count, data=f"Update {count + 1}: {datetime.now(UTC).isoformat()}")
                yield Record(comment="keep-alive")
                count += 1

        transform: Final = SseTransform(SseTransformOptions(object_mode=True))
        return sse_response(transform.stream(_records()))

    @app.post("/encode")
    async def encode_record(request: Request) -> PlainTextResponse:  # pyright: ignore[reportUnusedFunction]
        try:
            body: Final = EncodeRequest.model_validate_json(await request.body())
        except ValidationError as e:
            raise HTTPException(status_code=HTTPStatus.BAD_REQUEST, detail=str(e)) from e
        return PlainTextResponse(encode(body.record, field_map_from(body.field_map)), media_type=SSE_MEDIA_TYPE)

    return app


default_config: Final = Config()
app: Final = create_app(default_config)


def main() -> None:
    logging.basicConfig(level=default_config.log_level)
    logger.info(f"SSE server running on http://{default_config.host}:{default_config.port}")
    uvicorn.run(app, host=default_config.host, port=default_config.port)


if __name__ == "__main__":
    main()
