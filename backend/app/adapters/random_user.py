import asyncio
from typing import Dict, List, Optional

import httpx


class UpstreamFetchError(Exception):
    """Raised when an upstream seed API call fails or returns an unusable payload."""
    pass


def _client_kwargs(transport, timeout) -> Dict:
    kwargs = {}
    if transport is not None:
        kwargs["transport"] = transport
    if timeout is not None:
        kwargs["timeout"] = timeout
    return kwargs


def map_random_user(payload: Dict) -> Dict:
    """Map one randomuser.me response onto the local User fields."""
    u = payload["results"][0]
    return {
        "username": u["login"]["username"],
        "email": u["email"],
        "password": u["login"]["password"],
        "is_admin": 0,
    }


class RandomUserClient:
    """
    Client for the randomuser.me identity generator.

    Every call returns a single identity, so a batch of n users is n
    concurrent GETs. The batch is all-or-nothing.
    """

    def __init__(self, url: str, transport: Optional[httpx.AsyncBaseTransport] = None, timeout: Optional[float] = None):
        self.url = url
        self.transport = transport
        self.timeout = timeout

    async def fetch(self, n: int) -> List[Dict]:
        """
        Fetch `n` random identities.

        Raises:
            UpstreamFetchError: if any single request fails or its body cannot be mapped.
        """
        async with httpx.AsyncClient(**_client_kwargs(self.transport, self.timeout)) as client:
            try:
                responses = await asyncio.gather(*[client.get(self.url) for _ in range(n)])
                for r in responses:
                    r.raise_for_status()
                return [map_random_user(r.json()) for r in responses]
            except httpx.HTTPError as e:
                raise UpstreamFetchError(f"{type(e).__name__}: {e}") from e
            except (KeyError, IndexError, TypeError, ValueError) as e:
                raise UpstreamFetchError(f"Malformed identity payload: {e!r}") from e
