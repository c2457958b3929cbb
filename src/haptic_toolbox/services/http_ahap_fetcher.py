"""
基于aiohttp的AHAP下载器
"""

import asyncio
import logging
from pathlib import PurePosixPath
from urllib.parse import unquote, urlparse

import aiohttp

from haptic_toolbox.core.ahap.ahap_models import AHAPFetchError
from haptic_toolbox.services.haptic_service_interface import IAHAPFetcher

logger = logging.getLogger(__name__)

AHAP_EXTENSION = ".ahap"


def document_name_from_url(url: str) -> str:
    """从URL最后一段路径得到文档名称，去掉.ahap后缀"""
    path = unquote(urlparse(url).path)
    name = PurePosixPath(path).name
    return name.replace(AHAP_EXTENSION, "")


class HttpAHAPFetcher(IAHAPFetcher):
    """HTTP下载器"""

    DEFAULT_TIMEOUT = 30

    def __init__(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        super().__init__()
        self.timeout = timeout

    async def fetch(self, url: str) -> str:
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise AHAPFetchError(f"Invalid URL: {url}")

        try:
            # 使用trust_env=True自动使用系统代理
            async with aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                trust_env=True
            ) as session:
                async with session.get(url) as response:
                    response.raise_for_status()
                    data = await response.read()
        except aiohttp.ClientError as e:
            logger.error(f"Downloading AHAP from {url} failed: {e}")
            raise AHAPFetchError(f"Download failed: {e}") from e
        except asyncio.TimeoutError as e:
            logger.error(f"Downloading AHAP from {url} timed out")
            raise AHAPFetchError(f"Download timed out after {self.timeout}s") from e

        try:
            content = data.decode('utf-8')
        except UnicodeDecodeError as e:
            logger.error(f"AHAP from {url} is not valid UTF-8: {e}")
            raise AHAPFetchError("Invalid data received: not UTF-8 text") from e

        logger.info(f"Downloaded AHAP from {url} ({len(content)} chars)")
        return content
