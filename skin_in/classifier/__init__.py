# skin_in/classifier/__init__.py
"""
Skin Classifier Inference Module
================================
Model selection and prediction pipeline for skin condition analysis.

Supports:
- CNN: single-frame image classifier
- RNN: patch-sequence classifier
- GNN: patch-graph classifier

Usage:
    from skin_in.classifier import ModelRegistry, SkinAnalyzer

    registry = ModelRegistry.from_settings(settings)
    await registry.load_all()
    result = await SkinAnalyzer(registry).analyze(image_bytes, "CNN")
"""

from .conditions import CONDITIONS, ConditionEntry, NUM_CLASSES
from .registry import ModelRegistry, ModelDescriptor, ModelId
from .results import PredictionResult, normalize
from .predictor import Predictor
from .comparison import Comparison, ComparisonOrchestrator
from .analyzer import SkinAnalyzer, SessionGuard

__all__ = [
    "CONDITIONS",
    "ConditionEntry",
    "NUM_CLASSES",
    "ModelRegistry",
    "ModelDescriptor",
    "ModelId",
    "PredictionResult",
    "normalize",
    "Predictor",
    "Comparison",
    "ComparisonOrchestrator",
    "SkinAnalyzer",
    "SessionGuard",
]
