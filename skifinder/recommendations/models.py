from __future__ import annotations

import uuid
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .config import MAX_HEIGHT_CM, MIN_HEIGHT_CM

TagValue = Union[str, list[str], None]


class PriceRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: float = Field(..., ge=0)
    max: float = Field(..., ge=0)

    @model_validator(mode="before")
    @classmethod
    def _parse_range_string(cls, value: Any) -> Any:
        # The wizard sends price buckets as "500-800"
        if isinstance(value, str):
            parts = [p.strip() for p in value.split("-")]
            if len(parts) != 2 or not all(parts):
                raise ValueError(f"price range must look like 'min-max', got {value!r}")
            return {"min": parts[0], "max": parts[1]}
        return value

    @model_validator(mode="after")
    def _check_order(self) -> "PriceRange":
        if self.min > self.max:
            raise ValueError("price range minimum exceeds its maximum")
        return self

    def contains(self, price: float) -> bool:
        return self.min <= price <= self.max


class PreferenceSet(BaseModel):
    """Answers of one completed wizard session."""

    model_config = ConfigDict(frozen=True)

    gender: str | None = None
    ability: str | None = None
    piste: str | None = None
    speed: str | None = None
    turns: str | None = None
    price: PriceRange | None = None
    height: int = Field(..., ge=MIN_HEIGHT_CM, le=MAX_HEIGHT_CM, description="Skier height in cm")
    search_id: str = Field(
        default_factory=lambda: uuid.uuid4().hex,
        description="Echoed back so a client can drop results of a superseded search",
    )

    @field_validator("gender", "ability", "piste", "speed", "turns", mode="before")
    @classmethod
    def _blank_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("price", mode="before")
    @classmethod
    def _blank_price_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class CatalogItem(BaseModel):
    description: str = "N/A"
    manufacturer: str = "N/A"
    image_url: str | None = None
    product_url: str = "#"
    sale_price: float | None = None
    gender: TagValue = None
    ability: TagValue = None
    piste: TagValue = None
    speed: TagValue = None
    turns: TagValue = None


class RankedResult(CatalogItem):
    relevance_score: int = Field(..., ge=0, le=5)
    match_percentage: int = Field(..., ge=0, le=100)
    color: str


class RecommendationResponse(BaseModel):
    search_id: str
    status: Literal["ok", "no_results"]
    recommended_length: int
    results: list[RankedResult]
    total_candidates: int
    message: str | None = None


class CatalogResponse(BaseModel):
    skis: list[CatalogItem]
    total: int


class ErrorResponse(BaseModel):
    error: str
    kind: Literal["timeout", "failed"]
