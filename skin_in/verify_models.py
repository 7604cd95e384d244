# skin_in/verify_models.py
"""Verify all model artifacts load and return one score per condition."""

import argparse
import asyncio
import sys
from typing import Dict, List, Optional

import numpy as np

from skin_in.classifier import ModelId, ModelRegistry, Predictor, NUM_CLASSES
from skin_in.config import load_settings
from skin_in.preprocessing import shape
from skin_in.utils.logger import get_logger

logger = get_logger(__name__)


def _smoke_test(predictor: Predictor, model_id: ModelId) -> bool:
    """Run a mid-gray image through the model and check the output size."""
    image = np.full((300, 300, 3), 128, dtype=np.uint8)
    try:
        scores = predictor.infer(model_id, shape(image, model_id))
    except Exception as e:
        logger.error(f"  ✗ {model_id.value} inference failed: {e}")
        return False

    if len(scores) != NUM_CLASSES:
        logger.error(f"  ✗ {model_id.value} returned {len(scores)} scores, expected {NUM_CLASSES}")
        return False

    logger.info(f"  ✓ {model_id.value} returned {NUM_CLASSES} scores")
    return True


def verify(registry: ModelRegistry) -> Dict[ModelId, bool]:
    """Load every artifact and smoke-test the ones that loaded."""
    status = asyncio.run(registry.load_all())
    predictor = Predictor(registry)

    results = {}
    for model_id, loaded in status.items():
        results[model_id] = loaded and _smoke_test(predictor, model_id)
    return results


def main(argv: Optional[List[str]] = None, registry: Optional[ModelRegistry] = None) -> int:
    parser = argparse.ArgumentParser(description="Verify Skin-In model artifacts")
    parser.add_argument("--config", default=None, help="YAML configuration file")
    args = parser.parse_args(argv)

    if registry is None:
        registry = ModelRegistry.from_settings(load_settings(args.config))

    logger.info("=" * 60)
    logger.info("MODEL VERIFICATION")
    logger.info("=" * 60)

    results = verify(registry)

    logger.info("=" * 60)
    logger.info("VERIFICATION SUMMARY")
    logger.info("=" * 60)

    for model_id, ok in results.items():
        icon = "✓" if ok else "✗"
        logger.info(f"  {icon} {model_id.value}: {'PASSED' if ok else 'FAILED'}")

    all_passed = all(results.values())
    if all_passed:
        logger.info("  *** ALL MODELS VERIFIED SUCCESSFULLY! ***")
    else:
        logger.info("  *** SOME MODELS FAILED VERIFICATION ***")

    return 0 if all_passed else 1


if __name__ == "__main__":
    sys.exit(main())
