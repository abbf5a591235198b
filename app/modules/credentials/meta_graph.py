"""Meta Graph API check for a stored Pixel ID / access token pair."""

import logging
from typing import Any, Dict, Optional

import httpx

from app.config import settings

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Invalid credentials"
UNEXPECTED_RESPONSE_MESSAGE = "Unexpected response from Meta"


class MetaGraphError(Exception):
    """Raised when Meta rejects the credentials or cannot be reached."""

    def __init__(self, message: str, status_code: int = 0, error_code: int = 0):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        super().__init__(message)


class MetaGraphClient:
    """Single read-only call: GET /<pixel_id>?access_token=<token>. Never retried."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_version: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = (base_url or settings.meta_graph_base_url).rstrip("/")
        self.api_version = api_version or settings.meta_api_version
        self.timeout = timeout or settings.meta_request_timeout
        self._transport = transport

    def _url(self, object_id: str) -> str:
        return f"{self.base_url}/{self.api_version}/{object_id}"

    def validate_pixel(self, pixel_id: str, access_token: str) -> Dict[str, Any]:
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                resp = client.get(self._url(pixel_id), params={"access_token": access_token})
        except httpx.RequestError as e:
            logger.warning(f"Meta Graph API unreachable: {e}")
            raise MetaGraphError(f"Could not reach Meta: {e}") from e

        # Graph bodies are JSON even when labelled text/javascript
        try:
            body = resp.json()
        except ValueError:
            body = None

        if resp.is_success:
            if not isinstance(body, dict):
                logger.warning(f"Meta returned a non-JSON body for pixel {pixel_id}")
                raise MetaGraphError(UNEXPECTED_RESPONSE_MESSAGE)
            return body

        error = body.get("error") if isinstance(body, dict) else None
        if not isinstance(error, dict):
            error = {}
        message = error.get("message") or DEFAULT_ERROR_MESSAGE
        logger.info(f"Meta rejected pixel {pixel_id}: {resp.status_code} {message}")
        raise MetaGraphError(message, resp.status_code, error.get("code", 0))
