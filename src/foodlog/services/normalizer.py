"""Normalization of webhook analysis responses.

The automation behind the webhook does not have a stable output shape, so
every field is resolved through an ordered list of accessors. The first
accessor that yields a non-null value wins, otherwise the field default is
used.
"""

import logging
import math
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from foodlog.domain.food import (
    AnalyzeFailure,
    AnalyzeResult,
    AnalyzeSuccess,
    FoodItem,
    FoodNutrients,
    Nutrient,
    NutritionSummary,
)

WEBHOOK_ERROR = "WEBHOOK_ERROR"
PARSING_ERROR = "PARSING_ERROR"
WEBHOOK_ERROR_MESSAGE = "웹훅에서 오류가 반환되었습니다."
PARSING_ERROR_MESSAGE = "웹훅 응답을 해석할 수 없습니다."

UNKNOWN_FOOD_NAME = "알 수 없는 음식"
BLANK_FOOD_NAME = "음식"
DEFAULT_CONFIDENCE = 0.8
DEFAULT_QUANTITY = "1인분"
DEFAULT_MEAL_TYPE = "점심"

_ITEM_LIST_KEYS = ("items", "foods", "detected_foods")
_SUMMARY_KEYS = ("summary", "total", "nutrition")

_logger = logging.getLogger(__name__)

Accessor = Callable[[Mapping[str, object]], object]


def key(name: str) -> Accessor:
    """Read a top-level key."""

    def access(source: Mapping[str, object]) -> object:
        return source.get(name)

    return access


def nested(parent: str, name: str) -> Accessor:
    """Read a key inside a nested mapping, if the parent is a mapping."""

    def access(source: Mapping[str, object]) -> object:
        container = source.get(parent)
        if isinstance(container, Mapping):
            return container.get(name)
        return None

    return access


@dataclass(frozen=True)
class FieldSpec:
    """Ordered accessor attempts for a single output field."""

    accessors: Sequence[Accessor]
    default: object

    def resolve(self, source: Mapping[str, object]) -> object:
        """Return the first non-null accessor value or the default."""
        for accessor in self.accessors:
            value = accessor(source)
            if value is not None:
                return value
        return self.default


@dataclass(frozen=True)
class _NutrientSpec:
    name: str
    unit: str
    field: FieldSpec


ITEM_NAME = FieldSpec((key("name"), key("food_name")), UNKNOWN_FOOD_NAME)
ITEM_CONFIDENCE = FieldSpec((key("confidence"),), DEFAULT_CONFIDENCE)
ITEM_QUANTITY = FieldSpec((key("quantity"), key("amount")), DEFAULT_QUANTITY)
ITEM_CALORIES = FieldSpec((key("calories"), key("kcal")), 0)
ITEM_NUTRIENTS = (
    _NutrientSpec(
        "carbohydrates",
        "g",
        FieldSpec((nested("nutrients", "carbohydrates"), key("carbs")), 0),
    ),
    _NutrientSpec(
        "protein", "g", FieldSpec((nested("nutrients", "protein"), key("protein")), 0)
    ),
    _NutrientSpec("fat", "g", FieldSpec((nested("nutrients", "fat"), key("fat")), 0)),
    _NutrientSpec(
        "sugars", "g", FieldSpec((nested("nutrients", "sugars"), key("sugar")), 0)
    ),
    _NutrientSpec(
        "sodium", "mg", FieldSpec((nested("nutrients", "sodium"), key("sodium")), 0)
    ),
)

SUMMARY_CALORIES = FieldSpec((key("calories"), key("total_calories")), 0)
SUMMARY_CARBOHYDRATES = FieldSpec((key("carbohydrates"), key("carbs")), 0)
SUMMARY_PROTEIN = FieldSpec((key("protein"), key("total_protein")), 0)
SUMMARY_FAT = FieldSpec((key("fat"), key("total_fat")), 0)

MEAL_TYPE = FieldSpec((key("meal_type"), key("mealType")), DEFAULT_MEAL_TYPE)
IMAGE_URL = FieldSpec((key("image_url"), key("imageUrl")), "")


def normalize_webhook_response(raw: object) -> AnalyzeResult:
    """Convert a raw webhook payload into an analysis result."""
    if raw is None:
        return AnalyzeFailure(code=WEBHOOK_ERROR, message=WEBHOOK_ERROR_MESSAGE)
    if isinstance(raw, Mapping) and _is_error_flag(raw.get("error")):
        return _failure_from_error(raw["error"])

    try:
        if not isinstance(raw, Mapping):
            raise TypeError(f"Expected a JSON object, got {type(raw).__name__}")
        items = [_parse_item(entry) for entry in _locate_items(raw)]
        summary = _parse_summary(raw, items)
        meal_type = str(MEAL_TYPE.resolve(raw))
        image_url = str(IMAGE_URL.resolve(raw))
    except Exception as exc:
        _logger.warning("Failed to normalize webhook response: %s", exc)
        return AnalyzeFailure(code=PARSING_ERROR, message=PARSING_ERROR_MESSAGE)

    return AnalyzeSuccess(
        items=items,
        summary=summary,
        meal_type=meal_type,
        image_url=image_url,
        raw_response=dict(raw),
    )


def _is_error_flag(value: object) -> bool:
    """Apply JSON truthiness; empty objects and arrays still signal an error."""
    if isinstance(value, Mapping | list):
        return True
    return bool(value)


def _failure_from_error(error: object) -> AnalyzeFailure:
    if isinstance(error, Mapping):
        return AnalyzeFailure(
            code=str(error.get("code") or WEBHOOK_ERROR),
            message=str(error.get("message") or WEBHOOK_ERROR_MESSAGE),
        )
    if isinstance(error, str) and error.strip():
        return AnalyzeFailure(code=WEBHOOK_ERROR, message=error)
    return AnalyzeFailure(code=WEBHOOK_ERROR, message=WEBHOOK_ERROR_MESSAGE)


def _locate_items(raw: Mapping[str, object]) -> list[object]:
    for name in _ITEM_LIST_KEYS:
        value = raw.get(name)
        if value is None:
            continue
        if not isinstance(value, list):
            raise TypeError(f"'{name}' must be a list, got {type(value).__name__}")
        return value
    return []


def _parse_item(entry: object) -> FoodItem:
    if not isinstance(entry, Mapping):
        raise TypeError(f"Food item must be an object, got {type(entry).__name__}")
    name = str(ITEM_NAME.resolve(entry))
    if not name.strip():
        name = BLANK_FOOD_NAME
    nutrients = {
        spec.name: Nutrient(value=_to_number(spec.field.resolve(entry)), unit=spec.unit)
        for spec in ITEM_NUTRIENTS
    }
    return FoodItem(
        food_name=name,
        confidence=_to_number(ITEM_CONFIDENCE.resolve(entry)),
        quantity=str(ITEM_QUANTITY.resolve(entry)),
        calories=_to_number(ITEM_CALORIES.resolve(entry)),
        nutrients=FoodNutrients(**nutrients),
    )


def _parse_summary(
    raw: Mapping[str, object], items: list[FoodItem]
) -> NutritionSummary:
    block = next(
        (raw[name] for name in _SUMMARY_KEYS if isinstance(raw.get(name), Mapping)),
        None,
    )
    if block is None:
        summary = NutritionSummary.zero()
        for item in items:
            summary = summary.add(item)
        if not math.isfinite(summary.total_calories):
            raise ValueError("Derived calorie total is not finite")
        return summary
    return NutritionSummary(
        total_calories=_to_number(SUMMARY_CALORIES.resolve(block)),
        total_carbohydrates=Nutrient(
            value=_to_number(SUMMARY_CARBOHYDRATES.resolve(block)), unit="g"
        ),
        total_protein=Nutrient(
            value=_to_number(SUMMARY_PROTEIN.resolve(block)), unit="g"
        ),
        total_fat=Nutrient(value=_to_number(SUMMARY_FAT.resolve(block)), unit="g"),
    )


def _to_number(value: object) -> float:
    """Coerce a JSON value to a number, unwrapping {value, unit} objects."""
    if isinstance(value, Mapping):
        value = value.get("value", 0)
    if isinstance(value, bool):
        raise TypeError("Boolean is not a valid numeric value")
    if isinstance(value, str):
        value = float(value.strip())
    if not isinstance(value, int | float):
        raise TypeError(f"Expected a number, got {type(value).__name__}")
    # float() raises OverflowError for integers outside the double range.
    if not math.isfinite(float(value)):
        raise ValueError(f"Non-finite numeric value: {value}")
    return value
