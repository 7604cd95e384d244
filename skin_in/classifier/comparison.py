# skin_in/classifier/comparison.py
"""
Model Comparison
================
Runs the same image through every model and collects the results.

Comparison is all-or-nothing: it only starts when every model is loaded,
and if any of the concurrent pipelines fails the whole comparison fails
once all of them have settled.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple, Union

import numpy as np

from skin_in.config import ModelId
from skin_in.classifier.predictor import Predictor
from skin_in.classifier.registry import ModelRegistry
from skin_in.classifier.results import PredictionResult
from skin_in.preprocessing.image_preprocessing import load_image_from_bytes
from skin_in.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Comparison:
    available: bool
    results: Tuple[PredictionResult, ...] = ()
    missing: Tuple[ModelId, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "available": self.available,
            "results": [r.to_dict() for r in self.results],
            "missing": [m.value for m in self.missing],
        }


class ComparisonOrchestrator:
    """
    Fans an image out to all models.

    Usage:
        orchestrator = ComparisonOrchestrator(registry)
        comparison = await orchestrator.compare_all(image_bytes)
    """

    def __init__(self, registry: ModelRegistry, predictor: Predictor = None):
        self.registry = registry
        self.predictor = predictor or Predictor(registry)

    def _model_order(self) -> List[ModelId]:
        return [m for m in ModelId if m in self.registry.model_ids]

    async def compare_all(self, image: Union[bytes, np.ndarray]) -> Comparison:
        """
        Predict with every model concurrently.

        Returns:
            Comparison with one result per model (CNN, RNN, GNN order), or
            Comparison(available=False) without running anything when a
            model is not loaded.

        Raises:
            The first pipeline error, after every pipeline has settled.
        """
        status = self.registry.status()
        missing = tuple(m for m in self._model_order() if not status[m])
        if missing:
            logger.info(f"Comparison unavailable, models not loaded: {[m.value for m in missing]}")
            return Comparison(available=False, missing=missing)

        if isinstance(image, (bytes, bytearray)):
            image = await asyncio.to_thread(load_image_from_bytes, bytes(image))

        model_ids = self._model_order()
        logger.info(f"Comparing models: {[m.value for m in model_ids]}")

        outcomes = await asyncio.gather(
            *(asyncio.to_thread(self.predictor.predict, image, m) for m in model_ids),
            return_exceptions=True,
        )

        failures = [(m, o) for m, o in zip(model_ids, outcomes) if isinstance(o, Exception)]
        for model_id, error in failures:
            logger.error(f"{model_id.value} comparison failed: {error}")
        if failures:
            raise failures[0][1]

        return Comparison(available=True, results=tuple(outcomes))
