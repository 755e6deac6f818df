"""
Query resolvers.

Plain async functions, one per GraphQL query field. The schema module
adapts them to strawberry; everything here only needs a GatewayConfig
and an HTTP client, so tests call them directly.
"""
from dataclasses import dataclass
from typing import Optional

import httpx

from .config import GatewayConfig
from .errors import DownstreamDataError, GatewayError, ResolverError
from .llm import Message, ProviderId, ProviderResult, Usage, api_key_for, call_ai, get_llm_provider
from .pokeapi import PokeAPIClient, PokemonData
from .prompts import build_compare_messages, build_info_messages


@dataclass(frozen=True)
class AIAnswer:
    """What the AIResponse GraphQL type exposes. Usage is never None."""
    content: str
    model: str
    provider: str
    usage: Usage

    @classmethod
    def from_result(cls, result: ProviderResult) -> "AIAnswer":
        return cls(
            content=result.content,
            model=result.model,
            provider=result.provider.value,
            usage=result.usage or Usage(),
        )


async def _direct_chat(
    provider: ProviderId,
    operation: str,
    prompt: str,
    model: Optional[str],
    config: GatewayConfig,
    http: httpx.AsyncClient,
) -> AIAnswer:
    client = get_llm_provider(provider, http, config)
    messages = [Message(role="user", content=prompt)]
    try:
        result = await client.send_chat(messages, api_key_for(provider, config), model or client.default_model)
    except GatewayError as e:
        raise ResolverError(operation, e) from e
    return AIAnswer.from_result(result)


async def chat_gpt(prompt: str, model: Optional[str], config: GatewayConfig, http: httpx.AsyncClient) -> AIAnswer:
    """OpenAI only, no fallback."""
    return await _direct_chat(ProviderId.OPENAI, "ChatGPT error", prompt, model, config, http)


async def deepseek(prompt: str, model: Optional[str], config: GatewayConfig, http: httpx.AsyncClient) -> AIAnswer:
    """DeepSeek only, no fallback."""
    return await _direct_chat(ProviderId.DEEPSEEK, "DeepSeek error", prompt, model, config, http)


async def ask_ai(
    prompt: str,
    provider: Optional[str],
    model: Optional[str],
    config: GatewayConfig,
    http: httpx.AsyncClient,
) -> AIAnswer:
    """
    Coordinated query. The answer reports the provider and model that
    actually produced it, so after a fallback both differ from the request.
    """
    operation = "AI query failed"
    try:
        provider_id = ProviderId.parse(provider)
        result = await call_ai(
            [Message(role="user", content=prompt)],
            config,
            http,
            provider=provider_id,
            model=model,
        )
    except (GatewayError, ValueError) as e:
        raise ResolverError(operation, e) from e
    return AIAnswer.from_result(result)


async def pokemon(identifier: str, config: GatewayConfig, http: httpx.AsyncClient) -> Optional[PokemonData]:
    """Raw pokemon record; None when the source does not know it."""
    client = PokeAPIClient(http, config.pokeapi_base_url)
    try:
        return await client.fetch_pokemon(identifier)
    except DownstreamDataError as e:
        if e.status == 404:
            return None
        raise ResolverError("Pokemon lookup failed", e) from e


async def pokemon_info(
    name: str,
    provider: Optional[str],
    config: GatewayConfig,
    http: httpx.AsyncClient,
) -> str:
    operation = "Pokemon info failed"
    try:
        provider_id = ProviderId.parse(provider)
        data = await PokeAPIClient(http, config.pokeapi_base_url).fetch_pokemon(name)
        result = await call_ai(build_info_messages(name, data), config, http, provider=provider_id)
    except (GatewayError, ValueError) as e:
        raise ResolverError(operation, e) from e
    return result.content


async def compare_pokemon(
    pokemon1: str,
    pokemon2: str,
    provider: Optional[str],
    config: GatewayConfig,
    http: httpx.AsyncClient,
) -> str:
    operation = "Pokemon comparison failed"
    try:
        provider_id = ProviderId.parse(provider)
        data1, data2 = await PokeAPIClient(http, config.pokeapi_base_url).fetch_pair(pokemon1, pokemon2)
        result = await call_ai(
            build_compare_messages(pokemon1, data1, pokemon2, data2),
            config,
            http,
            provider=provider_id,
        )
    except (GatewayError, ValueError) as e:
        raise ResolverError(operation, e) from e
    return result.content
