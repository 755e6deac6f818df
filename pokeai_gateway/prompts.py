"""
Persona prompts for the pokemon-flavoured AI queries.
"""
from .llm import Message
from .pokeapi import PokemonData

INFO_PERSONA = "You are a Pokemon expert. Introduce Pokemon in a concise and entertaining way."
COMPARE_PERSONA = "You are a Pokemon expert. Compare and analyse the abilities of two Pokemon."


def describe(label: str, data: PokemonData) -> str:
    """One line of facts, e.g. "pikachu: height 4, weight 60, types electric"."""
    types = ", ".join(data.types) or "unknown"
    return f"{label}: height {data.height}, weight {data.weight}, types {types}"


def build_info_messages(name: str, data: PokemonData) -> list[Message]:
    return [
        Message(role="system", content=INFO_PERSONA),
        Message(
            role="user",
            content=(
                f"Tell me about the Pokemon {name}: its characteristics, abilities and fun facts.\n"
                f"{describe(name, data)}"
            ),
        ),
    ]


def build_compare_messages(
    name1: str,
    data1: PokemonData,
    name2: str,
    data2: PokemonData,
) -> list[Message]:
    return [
        Message(role="system", content=COMPARE_PERSONA),
        Message(
            role="user",
            content=(
                f"Compare {name1} and {name2}:\n"
                f"{describe(name1, data1)}\n"
                f"{describe(name2, data2)}\n"
                "\n"
                "Analyse their strengths, weaknesses and battle characteristics."
            ),
        ),
    ]
