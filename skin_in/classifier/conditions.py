# skin_in/classifier/conditions.py
"""
Condition Catalog
=================
Class index -> (name, recommendation). The position of each entry is the
index of the matching unit in every model's output layer, so the order can
only change together with a retrained model.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class ConditionEntry:
    name: str
    recommendation: str


CONDITIONS: Tuple[ConditionEntry, ...] = (
    ConditionEntry(
        name="Acne",
        recommendation="Use gentle cleansers and avoid oil-based products. "
                       "Consider seeing a dermatologist for persistent cases.",
    ),
    ConditionEntry(
        name="Eczema",
        recommendation="Apply fragrance-free moisturizers regularly. "
                       "Avoid triggers like harsh soaps and extreme temperatures.",
    ),
    ConditionEntry(
        name="Psoriasis",
        recommendation="Use medicated creams with salicylic acid or coal tar. "
                       "Phototherapy may help in severe cases.",
    ),
    ConditionEntry(
        name="Rosacea",
        recommendation="Use gentle skincare products and sunscreen daily. "
                       "Avoid triggers like spicy foods and alcohol.",
    ),
    ConditionEntry(
        name="Healthy Skin",
        recommendation="Maintain your current routine with daily cleansing, "
                       "moisturizing, and sun protection.",
    ),
)

NUM_CLASSES = len(CONDITIONS)


def condition_names() -> Tuple[str, ...]:
    """Catalog names in class-index order."""
    return tuple(entry.name for entry in CONDITIONS)
