from typing import Final
from typing import final


class SseStreamError(RuntimeError):
    """Terminal error of an SSE stream. Nothing is emitted after it is raised."""


@final
class SseDecodeError(SseStreamError):
    def __init__(self, message: str, source: str) -> None:
        super().__init__(message)
        self.source: Final = source


@final
class SseEncodingError(SseStreamError):
    pass


@final
class SseChannelClosedError(RuntimeError):
    pass
