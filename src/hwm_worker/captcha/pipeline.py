"""From captcha image URL to solved text.

The worker only knows where the captcha image lives. This module downloads
it, encodes it for the solving service and runs the resolver. The image is
kept in memory.
"""

import base64
from typing import Optional

import aiohttp

from hwm_worker.config.logger import logger as root_logger
from .exceptions import CaptchaEmpty
from .resolver import CaptchaResolver


def encode_image(image: bytes) -> str:
    """Return the base64 text the solving service expects for an image."""
    return base64.b64encode(image).decode("ascii")


class CaptchaPipeline:
    """Download, encode and resolve a captcha image."""

    def __init__(
        self,
        resolver: CaptchaResolver,
        session: Optional[aiohttp.ClientSession] = None,
        logger=None,
    ):
        self.resolver = resolver
        self._session = session
        self._owns_session = session is None
        self.logger = logger or root_logger.bind(component="captcha_pipeline")

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "CaptchaPipeline":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def download(self, image_url: Optional[str]) -> bytes:
        """Fetch the raw captcha image.

        Raises:
            CaptchaEmpty: No URL was given or the image body is empty.
            aiohttp.ClientResponseError: The image server answered with an error.
        """
        if not image_url:
            raise CaptchaEmpty("Captcha image URL is empty")

        session = await self._get_session()
        async with session.get(image_url) as resp:
            resp.raise_for_status()
            image = await resp.read()

        if not image:
            raise CaptchaEmpty(f"Captcha image at {image_url} is empty")

        self.logger.info("captcha_image_downloaded", url=image_url, size=len(image))
        return image

    async def solve_from_url(self, image_url: Optional[str]) -> str:
        """Download the captcha at ``image_url`` and return its solved text."""
        image = await self.download(image_url)
        return await self.resolver.resolve(encode_image(image))
