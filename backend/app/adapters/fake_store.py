from typing import Dict, List, Optional

import httpx

from app.adapters.random_user import UpstreamFetchError, _client_kwargs


def map_catalog_entry(entry: Dict) -> Dict:
    """Map one fakestoreapi.com catalogue entry onto the local Product fields."""
    rating = entry.get("rating") or {}
    return {
        "title": entry["title"],
        "description": entry.get("description"),
        "price": entry["price"],
        "image": entry.get("image"),
        "category": entry.get("category"),
        "rating_rate": rating.get("rate"),
        "rating_count": rating.get("count"),
    }


class FakeStoreClient:
    def __init__(self, url: str, transport: Optional[httpx.AsyncBaseTransport] = None, timeout: Optional[float] = None):
        self.url = url
        self.transport = transport
        self.timeout = timeout

    async def fetch(self) -> List[Dict]:
        async with httpx.AsyncClient(**_client_kwargs(self.transport, self.timeout)) as client:
            try:
                r = await client.get(self.url)
                r.raise_for_status()
                data = r.json()
            except httpx.HTTPError as e:
                raise UpstreamFetchError(f"{type(e).__name__}: {e}") from e
            except ValueError as e:
                raise UpstreamFetchError(f"Catalogue response is not JSON: {e}") from e

        if not isinstance(data, list):
            raise UpstreamFetchError(f"Expected a list of products, got {type(data).__name__}")
        try:
            return [map_catalog_entry(entry) for entry in data]
        except (KeyError, TypeError, AttributeError) as e:
            raise UpstreamFetchError(f"Malformed catalogue entry: {e!r}") from e
