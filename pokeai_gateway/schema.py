"""
GraphQL schema.

Thin strawberry adapters over the functions in resolvers.py. Field and
argument names follow the public API (chatGPT, askAI, front_default...),
which is why several fields carry an explicit name. Query fields are
nullable so that one failing field leaves its siblings intact.
"""
from typing import Optional

import httpx
import strawberry
from strawberry.fastapi import BaseContext
from strawberry.types import Info

from . import resolvers
from .config import GatewayConfig
from .pokeapi import PokemonData


class GatewayContext(BaseContext):
    """Per-request context: read-only config plus the shared HTTP client."""

    def __init__(self, config: GatewayConfig, http: httpx.AsyncClient):
        super().__init__()
        self.config = config
        self.http = http


@strawberry.type
class PokemonSprites:
    front_default: Optional[str] = strawberry.field(name="front_default")
    front_shiny: Optional[str] = strawberry.field(name="front_shiny")
    front_female: Optional[str] = strawberry.field(name="front_female")
    front_shiny_female: Optional[str] = strawberry.field(name="front_shiny_female")
    back_default: Optional[str] = strawberry.field(name="back_default")
    back_shiny: Optional[str] = strawberry.field(name="back_shiny")
    back_female: Optional[str] = strawberry.field(name="back_female")
    back_shiny_female: Optional[str] = strawberry.field(name="back_shiny_female")


@strawberry.type
class Pokemon:
    id: strawberry.ID
    name: str
    height: int
    weight: int
    types: list[str]
    sprites: PokemonSprites

    @classmethod
    def from_data(cls, data: PokemonData) -> "Pokemon":
        return cls(
            id=strawberry.ID(str(data.id)),
            name=data.name,
            height=data.height,
            weight=data.weight,
            types=list(data.types),
            sprites=PokemonSprites(**data.sprites),
        )


@strawberry.type(name="Usage")
class UsageType:
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


@strawberry.type
class AIResponse:
    content: str
    model: str
    provider: str
    usage: Optional[UsageType]

    @classmethod
    def from_answer(cls, answer: resolvers.AIAnswer) -> "AIResponse":
        return cls(
            content=answer.content,
            model=answer.model,
            provider=answer.provider,
            usage=UsageType(
                prompt_tokens=answer.usage.prompt_tokens,
                completion_tokens=answer.usage.completion_tokens,
                total_tokens=answer.usage.total_tokens,
            ),
        )


@strawberry.type
class Query:
    @strawberry.field
    async def pokemon(self, info: Info, id: strawberry.ID) -> Optional[Pokemon]:
        data = await resolvers.pokemon(str(id), info.context.config, info.context.http)
        return Pokemon.from_data(data) if data is not None else None

    @strawberry.field(name="chatGPT", description="OpenAI only")
    async def chat_gpt(self, info: Info, prompt: str, model: Optional[str] = None) -> Optional[AIResponse]:
        answer = await resolvers.chat_gpt(prompt, model, info.context.config, info.context.http)
        return AIResponse.from_answer(answer)

    @strawberry.field(description="DeepSeek only")
    async def deepseek(self, info: Info, prompt: str, model: Optional[str] = None) -> Optional[AIResponse]:
        answer = await resolvers.deepseek(prompt, model, info.context.config, info.context.http)
        return AIResponse.from_answer(answer)

    @strawberry.field(name="askAI", description="Preferred provider with automatic fallback")
    async def ask_ai(
        self,
        info: Info,
        prompt: str,
        provider: Optional[str] = None,
        model: Optional[str] = None,
    ) -> Optional[AIResponse]:
        answer = await resolvers.ask_ai(prompt, provider, model, info.context.config, info.context.http)
        return AIResponse.from_answer(answer)

    @strawberry.field
    async def pokemon_info(self, info: Info, name: str, provider: Optional[str] = None) -> Optional[str]:
        return await resolvers.pokemon_info(name, provider, info.context.config, info.context.http)

    @strawberry.field
    async def compare_pokemon(
        self,
        info: Info,
        pokemon1: str,
        pokemon2: str,
        provider: Optional[str] = None,
    ) -> Optional[str]:
        return await resolvers.compare_pokemon(
            pokemon1, pokemon2, provider, info.context.config, info.context.http
        )


schema = strawberry.Schema(query=Query)
