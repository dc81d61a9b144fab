"""Seed data initialization for catalog tables.

The recipe book is procedurally generated, so seeding takes the random
source that decides its contents.
"""

import logging
import random

from sqlalchemy import select
from sqlalchemy.orm import Session

from stellar_nexus.generators.recipes import generate_recipe_book

from .recipe import Recipe

logger = logging.getLogger(__name__)


def seed_recipes(session: Session, rng: random.Random, level: int = 5) -> int:
    """Seed the recipes table with a generated recipe book.

    Does nothing when any recipe already exists.

    Args:
        session: SQLAlchemy session to use for database operations
        rng: Random source for the recipe generator
        level: Highest recipe level to generate (capped at 5)

    Returns:
        Number of recipes inserted
    """
    result = session.execute(select(Recipe).limit(1))
    if result.scalar_one_or_none() is not None:
        return 0

    recipes = [
        Recipe(
            name=generated.name,
            type=str(generated.type),
            materials=generated.materials,
            result=generated.result,
            level=generated.level,
            rarity=str(generated.rarity),
            crafting_time=generated.crafting_time,
            description=generated.description,
            category=generated.category,
        )
        for generated in generate_recipe_book(rng, level)
    ]
    session.add_all(recipes)
    session.flush()
    logger.info("Seeded %d recipes up to level %d", len(recipes), level)
    return len(recipes)
