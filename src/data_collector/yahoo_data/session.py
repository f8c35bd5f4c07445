from __future__ import annotations

import asyncio
from typing import Any, Dict, Mapping, Optional, Union

import aiohttp

from src.data_collector.yahoo_data.config import YahooDataConfig, yahoo_data_config
from src.data_collector.yahoo_data.exceptions import TransportError
from src.utils.logger import get_logger


logger = get_logger(__name__)

ProxyConfig = Union[str, Mapping[str, str], None]


def resolve_proxy(proxy: ProxyConfig) -> Optional[str]:
    """Reduce a proxy setting (URL or {'https': url, 'http': url}) to one proxy URL"""
    if not proxy:
        return None
    if isinstance(proxy, str):
        return proxy
    return proxy.get("https") or proxy.get("http")


class SessionManager:
    """
    Thin HTTP transport: GET a URL and return the body text.
    Keeps HTTP concerns isolated (session, headers, proxy, timeouts). No retries.
    """

    def __init__(
        self, proxy: ProxyConfig = None, config: Optional[YahooDataConfig] = None
    ) -> None:
        self.config = config or yahoo_data_config
        self.proxy: Optional[str] = resolve_proxy(proxy) or self.config.PROXY
        self.session: Optional[aiohttp.ClientSession] = None

    def _new_session(self) -> aiohttp.ClientSession:
        timeout = aiohttp.ClientTimeout(
            total=self.config.REQUEST_TIMEOUT, connect=self.config.CONNECTION_TIMEOUT
        )
        return aiohttp.ClientSession(headers=self.config.headers, timeout=timeout)

    async def __aenter__(self) -> "SessionManager":
        self.session = self._new_session()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session:
            await self.session.close()
            self.session = None

    async def _request(
        self, session: aiohttp.ClientSession, url: str, params: Optional[Dict[str, Any]]
    ) -> str:
        try:
            async with session.get(url, params=params, proxy=self.proxy) as resp:
                body = await resp.text()
                if 200 <= resp.status < 300:
                    return body
                logger.error(f"HTTP {resp.status} from {url}")
                raise TransportError(
                    f"Response code {resp.status} ({resp.reason})", resp.status, body
                )
        except asyncio.TimeoutError as e:
            logger.error(f"Timeout requesting {url}")
            raise TransportError(f"Timeout requesting {url}") from e
        except aiohttp.ClientError as e:
            logger.error(f"HTTP failure requesting {url}: {e}")
            raise TransportError(str(e) or e.__class__.__name__) from e

    async def get(self, url: str, params: Optional[Dict[str, Any]] = None) -> str:
        """
        Issue a GET request and return the response body.

        Args:
            url: Absolute URL to fetch
            params: Query parameters (string values)

        Returns:
            Response body text for 2xx responses

        Raises:
            TransportError: On network failure, timeout or a non-2xx status
        """
        logger.debug(f"GET {url} params={params}")
        if self.session is not None:
            return await self._request(self.session, url, params)

        # Outside an `async with` block each request gets a short-lived session
        async with self._new_session() as session:
            return await self._request(session, url, params)
