"""Food analysis domain models."""

from dataclasses import dataclass, field
from typing import Literal


@dataclass(frozen=True)
class Nutrient:
    """Amount of a nutrient with its unit."""

    value: float
    unit: str


@dataclass(frozen=True)
class FoodNutrients:
    """Fixed nutrient breakdown for a single food item."""

    carbohydrates: Nutrient
    protein: Nutrient
    fat: Nutrient
    sugars: Nutrient
    sodium: Nutrient


@dataclass(frozen=True)
class FoodItem:
    """Detected food item with calories and nutrients."""

    food_name: str
    confidence: float
    quantity: str
    calories: float
    nutrients: FoodNutrients


@dataclass(frozen=True)
class NutritionSummary:
    """Meal-level nutrition totals."""

    total_calories: float
    total_carbohydrates: Nutrient
    total_protein: Nutrient
    total_fat: Nutrient

    @classmethod
    def zero(cls) -> "NutritionSummary":
        """Return an empty summary to accumulate items into."""
        return cls(
            total_calories=0,
            total_carbohydrates=Nutrient(value=0, unit="g"),
            total_protein=Nutrient(value=0, unit="g"),
            total_fat=Nutrient(value=0, unit="g"),
        )

    def add(self, item: FoodItem) -> "NutritionSummary":
        """Return a new summary with the item's calories and macros added."""
        nutrients = item.nutrients
        return NutritionSummary(
            total_calories=self.total_calories + item.calories,
            total_carbohydrates=Nutrient(
                value=self.total_carbohydrates.value + nutrients.carbohydrates.value,
                unit=self.total_carbohydrates.unit,
            ),
            total_protein=Nutrient(
                value=self.total_protein.value + nutrients.protein.value,
                unit=self.total_protein.unit,
            ),
            total_fat=Nutrient(
                value=self.total_fat.value + nutrients.fat.value,
                unit=self.total_fat.unit,
            ),
        )


@dataclass(frozen=True)
class AnalyzeSuccess:
    """Normalized analysis of a meal photo."""

    items: list[FoodItem]
    summary: NutritionSummary
    meal_type: str
    image_url: str
    raw_response: dict[str, object] | None = None
    success: Literal[True] = field(default=True, init=False)


@dataclass(frozen=True)
class AnalyzeFailure:
    """Analysis that could not be produced."""

    code: str
    message: str
    success: Literal[False] = field(default=False, init=False)


AnalyzeResult = AnalyzeSuccess | AnalyzeFailure
