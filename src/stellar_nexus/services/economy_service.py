"""Economy service: NPC market trades, player sales and crafting."""

from __future__ import annotations

import logging

from stellar_nexus.domain.economy import MarketCatalog, crafted_item_value, missing_materials
from stellar_nexus.domain.errors import (
    InsufficientCreditsError,
    InsufficientMaterialsError,
    InsufficientQuantityError,
    InvalidRequestError,
    NotFoundError,
)
from stellar_nexus.domain.models import MarketItem
from stellar_nexus.domain.rules_config import DEFAULT_RULES, RulesConfig
from stellar_nexus.generators.content import ContentGenerator, MarketDeal
from stellar_nexus.interfaces.storage import IGameStorage
from stellar_nexus.models import MarketTransaction, Recipe, Resource, utc_now

from .results import CraftResult, PurchaseResult, SaleResult

logger = logging.getLogger(__name__)


def _required_totals(recipe: Recipe) -> dict[str, int]:
    totals: dict[str, int] = {}
    for material in recipe.materials:
        totals[material["name"]] = totals.get(material["name"], 0) + int(material["quantity"])
    return totals


class EconomyService:
    """Market, trading and crafting operations.

    The NPC market stock lives in the shared :class:`MarketCatalog`; every
    other change goes through the persistence gateway in one transaction.
    Purchased units are reserved up front and handed back if the purchase
    does not commit.
    """

    def __init__(
        self,
        storage: IGameStorage,
        market: MarketCatalog,
        content: ContentGenerator,
        rules: RulesConfig = DEFAULT_RULES,
    ) -> None:
        self.storage = storage
        self.market = market
        self.content = content
        self.rules = rules

    def get_market_items(self) -> list[MarketItem]:
        return self.market.list_items()

    def buy_item(self, user_id: int, item_name: str, quantity: int) -> PurchaseResult:
        """Buy ``quantity`` units of a market item at its current price.

        Raises:
            InvalidRequestError: If quantity is below 1
            NotFoundError: If the user or item is missing
            InsufficientAvailabilityError: If the market holds fewer units
            InsufficientCreditsError: If the user cannot pay
        """
        item = self.market.reserve(item_name, quantity)
        total_price = item.price * quantity

        try:
            resource = self._record_purchase(user_id, item, quantity, total_price)
        except Exception:
            self.market.release(item.name, quantity)
            raise

        logger.info(
            "User %s bought %d x %s for %d credits", user_id, quantity, item.name, total_price
        )
        return PurchaseResult(item, quantity, total_price, resource)

    def _record_purchase(
        self, user_id: int, item: MarketItem, quantity: int, total_price: int
    ) -> Resource:
        with self.storage.transaction():
            user = self.storage.get_user(user_id, for_update=True)
            if user is None:
                raise NotFoundError("user", user_id)
            if user.credits < total_price:
                raise InsufficientCreditsError(total_price, user.credits)

            user.credits -= total_price
            user.last_active = utc_now()
            resource = self.storage.add_resource(
                user_id,
                item.name,
                str(item.type),
                quantity=quantity,
                value=item.price,
                rarity=str(item.rarity),
                description=item.description,
            )
            self.storage.add_market_transaction(
                seller_id=None,
                buyer_id=user_id,
                item_type=str(item.type),
                item_name=item.name,
                quantity=quantity,
                price_per_unit=item.price,
                total_price=total_price,
            )
        return resource

    def sell_resource(
        self, user_id: int, resource_id: int, quantity: int, price_per_unit: int
    ) -> SaleResult:
        """Sell units of one of the user's resource stacks.

        Raises:
            InvalidRequestError: If quantity or price is not positive
            NotFoundError: If the user is missing or the resource is not theirs
            InsufficientQuantityError: If the stack holds fewer units
        """
        if quantity < 1 or price_per_unit < 1:
            raise InvalidRequestError(
                "quantity and price per unit must be positive",
                details={"quantity": quantity, "price_per_unit": price_per_unit},
            )

        with self.storage.transaction():
            user = self.storage.get_user(user_id, for_update=True)
            if user is None:
                raise NotFoundError("user", user_id)
            resource = self.storage.get_resource(resource_id, for_update=True)
            if resource is None or resource.user_id != user_id:
                raise NotFoundError("resource", resource_id)
            if resource.quantity < quantity:
                raise InsufficientQuantityError(quantity, resource.quantity, resource=resource.name)

            name, item_type = resource.name, resource.type
            total_income = quantity * price_per_unit
            remaining = resource.quantity - quantity
            if remaining == 0:
                self.storage.remove_resource(resource_id)
            else:
                self.storage.update_resource(resource_id, quantity=remaining)

            user.credits += total_income
            user.trade_count += 1
            user.last_active = utc_now()
            self.storage.add_market_transaction(
                seller_id=user_id,
                buyer_id=user_id,
                item_type=item_type,
                item_name=name,
                quantity=quantity,
                price_per_unit=price_per_unit,
                total_price=total_income,
            )

        logger.info(
            "User %s sold %d x %s for %d credits", user_id, quantity, name, total_income
        )
        return SaleResult(name, quantity, price_per_unit, total_income, remaining)

    def craft_item(self, user_id: int, recipe_id: int) -> CraftResult:
        """Consume a recipe's materials and add its result to the inventory.

        Every material is checked before any is consumed.

        Raises:
            NotFoundError: If the user or recipe is missing
            InsufficientMaterialsError: If any material is short
        """
        with self.storage.transaction():
            recipe = self.storage.get_recipe(recipe_id)
            if recipe is None:
                raise NotFoundError("recipe", recipe_id)
            required = _required_totals(recipe)

            user = self.storage.get_user(user_id, for_update=True)
            if user is None:
                raise NotFoundError("user", user_id)
            missing = missing_materials(
                [{"name": name, "quantity": qty} for name, qty in required.items()],
                self.storage.held_quantities(user_id),
            )
            if missing:
                raise InsufficientMaterialsError(missing)

            for name, qty in required.items():
                self.storage.consume_resource(user_id, name, qty)

            result_name = recipe.result.get("name", recipe.name)
            result_quantity = int(recipe.result.get("quantity", 1))
            resource = self.storage.add_resource(
                user_id,
                result_name,
                recipe.type,
                quantity=result_quantity,
                value=crafted_item_value(recipe.rarity),
                rarity=recipe.rarity,
                description=recipe.description,
            )
            user.last_active = utc_now()

        logger.info("User %s crafted %d x %s", user_id, result_quantity, result_name)
        return CraftResult(recipe, resource, result_quantity, required)

    def get_all_recipes(self) -> list[Recipe]:
        return self.storage.get_all_recipes()

    def get_market_history(self, limit: int | None = None) -> list[MarketTransaction]:
        """Most recent trades first; defaults to the configured history limit."""
        return self.storage.get_market_history(limit or self.rules.economy.market_history_limit)

    def generate_daily_deals(self, user_level: int) -> list[MarketDeal]:
        return self.content.generate_daily_market_deals(user_level)
