# backend/mathnotes/services/recognition.py
import time
from typing import Optional

import httpx

from ..config import settings
from ..exceptions import RecognitionError
from ..models.page import PagePayload
from ..utils.logging import service_logger


class RecognitionService:
    """Sends a page payload to the recognition endpoint and returns the recognised text or markup"""

    def __init__(
            self,
            url: Optional[str] = None,
            timeout: Optional[float] = None,
            transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.url = url or settings.RECOGNITION_URL
        self.timeout = settings.RECOGNITION_TIMEOUT if timeout is None else timeout
        self.transport = transport

    async def recognize(self, payload: PagePayload, filename: str = "page.drawing") -> str:
        if payload.is_empty:
            raise RecognitionError("Page is empty, nothing to recognize")

        start_time = time.perf_counter()
        service_logger.info("Sending page for recognition", extra={
            "url": self.url,
            "payload_size": len(payload)
        })

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    self.url,
                    files={"file": (filename, payload.data, "application/octet-stream")}
                )
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPStatusError as e:
            service_logger.error("Recognition endpoint returned an error", extra={
                "url": self.url,
                "status_code": e.response.status_code
            })
            raise RecognitionError(f"Recognition failed with status {e.response.status_code}") from e
        except httpx.HTTPError as e:
            service_logger.error("Recognition request failed", extra={
                "url": self.url,
                "error": str(e)
            })
            raise RecognitionError(f"Recognition request failed: {e}") from e
        except ValueError as e:
            raise RecognitionError("Recognition endpoint returned invalid JSON") from e

        text = body.get("text") if isinstance(body, dict) else None
        if not isinstance(text, str):
            raise RecognitionError("Recognition response has no text field")

        service_logger.info("Recognition completed", extra={
            "text_length": len(text),
            "execution_time_ms": round((time.perf_counter() - start_time) * 1000, 2)
        })
        return text
