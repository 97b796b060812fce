"""Client for the rucaptcha / 2captcha HTTP API.

The service exposes two endpoints:

- ``in.php`` accepts a base64 image and returns a job id.
- ``res.php`` returns the solved text for a job id once a worker finished it.

Both reply with ``{"status": 0|1, "request": "..."}``. This client maps those
replies to return values or typed exceptions and never retries on its own.
"""

from typing import Any, Dict, Optional

import aiohttp

from hwm_worker.config.logger import logger as root_logger
from hwm_worker.config.settings import RUCAPTCHA_URL, Settings
from .exceptions import InsufficientBalance, NotReadyYet, ServiceRejected
from .interfaces import ICaptchaService

ZERO_BALANCE = "ERROR_ZERO_BALANCE"


class RuCaptchaClient(ICaptchaService):
    """Captcha service client for the rucaptcha ``in.php``/``res.php`` protocol.

    The client is stateless with respect to jobs. It only holds the API key
    and an HTTP session, which is created lazily unless one is injected.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = RUCAPTCHA_URL,
        session: Optional[aiohttp.ClientSession] = None,
        logger=None,
    ):
        """Initialize the client.

        Args:
            api_key: Service API key.
            base_url: Service root, without trailing slash.
            session: Optional shared HTTP session. Not closed by the client.
            logger: Optional structlog logger.
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self._session = session
        self._owns_session = session is None
        self.logger = logger or root_logger.bind(component="rucaptcha_client")

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "RuCaptchaClient":
        return cls(settings.rucaptcha_api_key, base_url=settings.rucaptcha_url, **kwargs)

    @property
    def submit_url(self) -> str:
        return f"{self.base_url}/in.php"

    @property
    def poll_url(self) -> str:
        return f"{self.base_url}/res.php"

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "RuCaptchaClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def submit(self, payload: str) -> str:
        session = await self._get_session()
        form = {
            "method": "base64",
            "key": self.api_key,
            "body": payload,
            "numeric": "4",
            "json": "1",
        }

        self.logger.info("captcha_submitting", payload_size=len(payload))
        async with session.post(self.submit_url, data=form) as resp:
            data = await self._decode(resp)

        if _is_success(data):
            external_id = str(data.get("request", ""))
            self.logger.info("captcha_submitted", external_id=external_id)
            return external_id

        code = data.get("request")
        self.logger.error("captcha_submit_failed", code=code, error_text=data.get("error_text"))
        if code == ZERO_BALANCE:
            raise InsufficientBalance(data.get("error_text") or code)
        raise ServiceRejected(data)

    async def poll(self, external_id: str) -> str:
        session = await self._get_session()
        params = {
            "key": self.api_key,
            "action": "get",
            "id": external_id,
            "json": "1",
        }

        async with session.get(self.poll_url, params=params) as resp:
            data = await self._decode(resp)

        if _is_success(data):
            self.logger.info("captcha_ready", external_id=external_id)
            return str(data.get("request", ""))

        self.logger.info("captcha_not_ready", external_id=external_id, code=data.get("request"))
        raise NotReadyYet(data)

    async def _decode(self, resp: aiohttp.ClientResponse) -> Dict[str, Any]:
        # The service answers json=1 requests with a text/html content type
        try:
            data = await resp.json(content_type=None)
        except ValueError as e:
            self.logger.error("captcha_invalid_json", http_status=resp.status, error=str(e))
            raise ServiceRejected({"http_status": resp.status}, f"Invalid JSON from captcha service: {e}")

        if not isinstance(data, dict):
            raise ServiceRejected({"body": data})
        return data


def _is_success(data: Dict[str, Any]) -> bool:
    return str(data.get("status")) == "1"
