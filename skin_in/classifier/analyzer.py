# skin_in/classifier/analyzer.py
"""
Skin Analyzer - Central Analysis Engine
=======================================
Entry point used by the API: single-model analysis and the all-model
comparison, with a guard against overlapping requests from one session.

Usage:
    registry = ModelRegistry.from_settings(load_settings())
    await registry.load_all()

    analyzer = SkinAnalyzer(registry)
    result = await analyzer.analyze(image_bytes, "CNN", session_key="abc")
    comparison = await analyzer.compare(image_bytes, session_key="abc")
"""

import asyncio
from contextlib import contextmanager
from typing import Iterator, Optional, Set, Union

import numpy as np

from skin_in.config import ModelId
from skin_in.classifier.comparison import Comparison, ComparisonOrchestrator
from skin_in.classifier.predictor import Predictor
from skin_in.classifier.registry import ModelRegistry
from skin_in.classifier.results import PredictionResult
from skin_in.utils.exception import AnalysisInProgressError, NotLoadedError
from skin_in.utils.logger import get_logger

logger = get_logger(__name__)


class SessionGuard:
    """
    Tracks sessions with an analysis in flight.

    A second request from a busy session is rejected rather than queued.
    Requests without a session key are never blocked. Check-and-add happens
    without an await in between, so it is atomic on the event loop.
    """

    def __init__(self):
        self._active: Set[str] = set()

    def is_busy(self, session_key: Optional[str]) -> bool:
        return session_key is not None and session_key in self._active

    @contextmanager
    def hold(self, session_key: Optional[str]) -> Iterator[None]:
        if session_key is None:
            yield
            return

        if session_key in self._active:
            raise AnalysisInProgressError("An analysis is already running. Please wait for it to finish.")

        self._active.add(session_key)
        try:
            yield
        finally:
            self._active.discard(session_key)


class SkinAnalyzer:
    """
    Routes analysis requests to the registry's models.

    Attributes:
        registry: Loaded ModelRegistry shared with the orchestrator
        guard: SessionGuard for re-entrant requests
    """

    def __init__(
        self,
        registry: ModelRegistry,
        predictor: Optional[Predictor] = None,
        orchestrator: Optional[ComparisonOrchestrator] = None,
    ):
        self.registry = registry
        self.predictor = predictor or Predictor(registry)
        self.orchestrator = orchestrator or ComparisonOrchestrator(registry, self.predictor)
        self.guard = SessionGuard()

    async def analyze(
        self,
        image: Union[bytes, np.ndarray],
        model_id: Union[ModelId, str],
        session_key: Optional[str] = None,
    ) -> PredictionResult:
        """
        Analyze an image with one model.

        Raises:
            ValueError: Unknown model id
            NotLoadedError: Model not loaded (checked before decoding)
            AnalysisInProgressError: Session already has an analysis running
            PreprocessError, ScoreVectorError, PredictionError: From the pipeline
        """
        try:
            model_id = ModelId(model_id)
        except ValueError:
            raise ValueError(f"Unknown model type: {model_id}. Must be one of {[m.value for m in ModelId]}")

        if not self.registry.is_loaded(model_id):
            raise NotLoadedError(f"{model_id.value} model is not available. Please try another model.")

        with self.guard.hold(session_key):
            logger.info(f"Analyzing with {model_id.value}...")
            return await asyncio.to_thread(self.predictor.predict, image, model_id)

    async def compare(
        self,
        image: Union[bytes, np.ndarray],
        session_key: Optional[str] = None,
    ) -> Comparison:
        """Compare all models on one image; see ComparisonOrchestrator.compare_all."""
        with self.guard.hold(session_key):
            return await self.orchestrator.compare_all(image)
