# skin_in/classifier/results.py
"""
Result Normalization
====================
Turns a raw score vector into a labeled PredictionResult.

The label and recommendation wording differs per model family. That
wording is plain string decoration of the catalog entry; it carries no
extra inference.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Sequence, Tuple

import numpy as np

from skin_in.config import ModelId
from skin_in.classifier.conditions import CONDITIONS, NUM_CLASSES
from skin_in.utils.exception import ScoreVectorError


# (label suffix, recommendation prefix) per model
LABEL_DECORATIONS: Dict[ModelId, Tuple[str, str]] = {
    ModelId.CNN: ("", ""),
    ModelId.RNN: (" Progression", "Based on temporal patterns: "),
    ModelId.GNN: (" Network", "Based on lesion relationships: "),
}


@dataclass(frozen=True)
class PredictionResult:
    model_id: ModelId
    condition_label: str
    confidence: float
    recommendation: str
    raw_scores: Tuple[float, ...]
    class_id: int
    condition: str

    @property
    def confidence_percent(self) -> int:
        return int(round(self.confidence * 100))

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result["model_id"] = self.model_id.value
        result["raw_scores"] = list(self.raw_scores)
        return result


def argmax_first(scores: Sequence[float]) -> int:
    """Index of the maximum score; the lowest index wins on ties."""
    # np.argmax returns the first occurrence of the maximum
    return int(np.argmax(np.asarray(scores, dtype=np.float64)))


def normalize(raw_scores: Sequence[float], model_id: ModelId) -> PredictionResult:
    """
    Map raw scores to a PredictionResult.

    Args:
        raw_scores: One score per catalog entry, in class-index order
        model_id: Model that produced the scores

    Returns:
        PredictionResult for the highest-scoring condition

    Raises:
        ScoreVectorError: (an IndexError) if the vector is empty or its length
            differs from the condition catalog, or a score is NaN or infinite
    """
    model_id = ModelId(model_id)
    scores = np.asarray(raw_scores, dtype=np.float64).flatten()

    if scores.size == 0:
        raise ScoreVectorError(f"{model_id.value} returned an empty score vector")
    if scores.size != NUM_CLASSES:
        raise ScoreVectorError(
            f"{model_id.value} returned {scores.size} scores, expected {NUM_CLASSES}"
        )
    if not np.all(np.isfinite(scores)):
        raise ScoreVectorError(f"{model_id.value} returned non-finite scores: {scores.tolist()}")

    class_id = argmax_first(scores)
    entry = CONDITIONS[class_id]
    suffix, prefix = LABEL_DECORATIONS[model_id]

    return PredictionResult(
        model_id=model_id,
        condition_label=f"{entry.name}{suffix}",
        confidence=float(scores[class_id]),
        recommendation=f"{prefix}{entry.recommendation}",
        raw_scores=tuple(float(s) for s in scores),
        class_id=class_id,
        condition=entry.name,
    )
