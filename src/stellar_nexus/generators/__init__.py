"""Procedural content: names, planets, creatures, lore, recipes and sectors."""

from .content import ContentGenerator
from .creatures import generate_boss, generate_creature, generate_swarm
from .lore import generate_codex, generate_lore, generate_quest_lore
from .names import generate_name
from .planets import generate_planet
from .recipes import generate_recipe, generate_recipe_book

__all__ = [
    "ContentGenerator",
    "generate_boss",
    "generate_codex",
    "generate_creature",
    "generate_lore",
    "generate_name",
    "generate_planet",
    "generate_quest_lore",
    "generate_recipe",
    "generate_recipe_book",
    "generate_swarm",
]
