from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .player import ResourceRead


class MarketItemRead(BaseModel):
    name: str
    type: str
    price: int = Field(..., description="Current price per unit")
    available: int = Field(..., ge=0, description="Units in stock")
    rarity: str
    description: str


class BuyRequest(BaseModel):
    user_id: int
    item_name: str = Field(..., min_length=1)
    quantity: int = Field(default=1, description="Units to buy; must be at least 1")


class PurchaseResponse(BaseModel):
    item: MarketItemRead
    quantity: int
    total_price: int
    resource: ResourceRead


class SellRequest(BaseModel):
    user_id: int
    resource_id: int
    quantity: int = Field(..., description="Units to sell; must be at least 1")
    price_per_unit: int = Field(..., description="Asking price; must be at least 1")


class SaleResponse(BaseModel):
    resource_name: str
    quantity: int
    price_per_unit: int
    total_income: int
    remaining: int = Field(..., description="Units left in the stack")


class MarketTransactionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Primary key")
    seller_id: int | None = Field(None, description="Empty when the NPC market sold")
    buyer_id: int | None = None
    item_type: str
    item_name: str
    quantity: int
    price_per_unit: int
    total_price: int
    timestamp: datetime


class MarketDealRead(BaseModel):
    name: str
    rarity: str
    original_price: int
    sale_price: int
    discount: int = Field(..., description="Percent off the original price")
    hours_left: int


class RecipeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Primary key")
    name: str
    type: str
    materials: list[dict[str, Any]]
    result: dict[str, Any]
    level: int
    rarity: str
    crafting_time: int = Field(..., description="Minutes")
    description: str | None = None
    category: str | None = None


class CraftRequest(BaseModel):
    recipe_id: int


class CraftResponse(BaseModel):
    recipe: RecipeRead
    resource: ResourceRead
    quantity: int
    consumed: dict[str, int]
