"""
Client for the public Pokemon data API (pokeapi.co).
"""
import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Optional
from urllib.parse import quote

import httpx

from .errors import DownstreamDataError

logger = logging.getLogger(__name__)

SPRITE_KEYS = (
    "front_default",
    "front_shiny",
    "front_female",
    "front_shiny_female",
    "back_default",
    "back_shiny",
    "back_female",
    "back_shiny_female",
)


@dataclass(frozen=True)
class PokemonData:
    """The subset of a PokeAPI pokemon record the gateway uses."""
    id: int
    name: str
    height: int
    weight: int
    types: tuple[str, ...] = ()
    sprites: dict[str, Optional[str]] = field(default_factory=dict, compare=False)

    @classmethod
    def from_payload(cls, identifier: str, payload: Any) -> "PokemonData":
        if not isinstance(payload, dict):
            raise DownstreamDataError(identifier, f"Unexpected Pokemon payload for '{identifier}'")
        try:
            types = tuple(
                t["type"]["name"]
                for t in sorted(payload.get("types") or [], key=lambda t: t.get("slot", 0))
            )
            raw_sprites = payload.get("sprites") or {}
            return cls(
                id=int(payload["id"]),
                name=str(payload["name"]),
                height=int(payload["height"]),
                weight=int(payload["weight"]),
                types=types,
                sprites={key: raw_sprites.get(key) for key in SPRITE_KEYS},
            )
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise DownstreamDataError(
                identifier, f"Malformed Pokemon payload for '{identifier}': missing or bad {e}"
            ) from e


class PokeAPIClient:
    """Fetches pokemon by id or name."""

    def __init__(self, http: httpx.AsyncClient, base_url: str = "https://pokeapi.co/api/v2"):
        self._http = http
        self._base_url = base_url.rstrip("/")

    async def fetch_pokemon(self, identifier: str) -> PokemonData:
        """
        Fetch one pokemon. Names are lowercased; numeric ids pass through.

        Raises:
            DownstreamDataError on transport errors, non-2xx statuses and
            bodies that are not a pokemon record
        """
        key = str(identifier).strip().lower()
        if not key:
            raise DownstreamDataError(key, "Pokemon name or id must not be empty")

        url = f"{self._base_url}/pokemon/{quote(key, safe='')}"
        logger.debug("PokeAPI request: %s", url)

        try:
            response = await self._http.get(url)
        except httpx.HTTPError as e:
            logger.error("PokeAPI request for '%s' failed: %s", key, e)
            raise DownstreamDataError(key, f"Pokemon data source unreachable: {e}") from e

        if not response.is_success:
            logger.warning("PokeAPI returned %d for '%s'", response.status_code, key)
            message = (
                f"Pokemon '{key}' not found"
                if response.status_code == 404
                else f"Pokemon data source error: {response.status_code}"
            )
            raise DownstreamDataError(key, message, status=response.status_code)

        try:
            payload = response.json()
        except json.JSONDecodeError as e:
            raise DownstreamDataError(
                key, f"Pokemon data source returned invalid JSON for '{key}'", status=response.status_code
            ) from e

        return PokemonData.from_payload(key, payload)

    async def fetch_pair(self, first: str, second: str) -> tuple[PokemonData, PokemonData]:
        """Fetch two pokemon concurrently. Either failure fails the pair."""
        data1, data2 = await asyncio.gather(
            self.fetch_pokemon(first),
            self.fetch_pokemon(second),
        )
        return data1, data2
