"""Pydantic models for upload API responses."""

from dataclasses import asdict

from pydantic import AliasGenerator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from foodlog.domain.food import AnalyzeSuccess


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )


class NutrientPayload(_CamelModel):
    """Nutrient amount with unit."""

    value: float
    unit: str


class FoodNutrientsPayload(_CamelModel):
    """Per-item nutrient breakdown."""

    carbohydrates: NutrientPayload
    protein: NutrientPayload
    fat: NutrientPayload
    sugars: NutrientPayload
    sodium: NutrientPayload


class FoodItemPayload(_CamelModel):
    """Detected food item."""

    food_name: str
    confidence: float
    quantity: str
    calories: float
    nutrients: FoodNutrientsPayload


class NutritionSummaryPayload(_CamelModel):
    """Meal nutrition totals."""

    total_calories: float
    total_carbohydrates: NutrientPayload
    total_protein: NutrientPayload
    total_fat: NutrientPayload


class AnalysisPayload(_CamelModel):
    """Normalized analysis returned to clients."""

    items: list[FoodItemPayload]
    summary: NutritionSummaryPayload
    meal_type: str
    image_url: str
    webhook_response: dict[str, object] | None = None

    @classmethod
    def from_result(cls, result: AnalyzeSuccess) -> "AnalysisPayload":
        """Build the payload from a successful analysis."""
        return cls(
            items=[
                FoodItemPayload.model_validate(asdict(item)) for item in result.items
            ],
            summary=NutritionSummaryPayload.model_validate(asdict(result.summary)),
            meal_type=result.meal_type,
            image_url=result.image_url,
            webhook_response=result.raw_response,
        )


class UploadResponse(BaseModel):
    """Envelope returned by the upload endpoints."""

    success: bool
    message: str | None = None
    data: AnalysisPayload | None = None
    error: str | None = None
    details: str | None = None
    debug: dict[str, object] | None = None

    def to_content(self) -> dict[str, object]:
        """Serialize to a JSON-compatible dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
