import asyncio


def run(coro):
    """Run a coroutine to completion in a fresh event loop and return its result."""
    return asyncio.run(coro)


class FakeAiohttpResponse:
    """Stand-in for aiohttp.ClientResponse used as `async with session.get(...)`."""

    def __init__(self, status=200, body="", reason="OK"):
        self.status = status
        self.reason = reason
        self._body = body

    async def text(self):
        return self._body

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeAiohttpSession:
    """Stand-in for aiohttp.ClientSession recording every get() call.

    `responses` holds FakeAiohttpResponse objects or exceptions, consumed in order.
    """

    def __init__(self, responses):
        self._responses = list(responses)
        self.calls = []
        self.closed = False

    def get(self, url, params=None, proxy=None):
        self.calls.append({"url": url, "params": params, "proxy": proxy})
        reply = self._responses.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def close(self):
        self.closed = True

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
        return False
