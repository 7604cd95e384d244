# skin_in/classifier/predictor.py
"""
Predictor
=========
Runs a loaded model on shaped input and returns its raw scores.
"""

from typing import List, Union

import numpy as np

from skin_in.config import ModelId
from skin_in.classifier.registry import ModelRegistry
from skin_in.classifier.results import PredictionResult, normalize
from skin_in.preprocessing.image_preprocessing import GraphInput, ModelInput, shape
from skin_in.utils.exception import NotLoadedError, PredictionError
from skin_in.utils.logger import get_logger

logger = get_logger(__name__)


class Predictor:
    """
    Invokes registry handles.

    Image models are run with Keras predict(inputs, verbose=0). The graph
    model is called directly with [node_features, adjacency] so the whole
    graph is one forward pass.
    """

    def __init__(self, registry: ModelRegistry):
        self.registry = registry

    def infer(self, model_id: ModelId, model_input: ModelInput) -> List[float]:
        """
        Run inference synchronously.

        Args:
            model_id: Model to run
            model_input: Output of preprocessing.shape() for that model

        Returns:
            Flat list of raw scores

        Raises:
            NotLoadedError: If the model is not loaded
            PredictionError: If the runtime fails
        """
        model_id = ModelId(model_id)
        if not self.registry.is_loaded(model_id):
            raise NotLoadedError(f"{model_id.value} model is not available. Please try another model.")

        model = self.registry.handle_for(model_id)

        try:
            if isinstance(model_input, GraphInput):
                # predict() batches along axis 0, which is the node axis here
                prediction = model(model_input.as_model_inputs(), training=False)
            else:
                prediction = model.predict(model_input, verbose=0)
        except Exception as e:
            logger.error(f"{model_id.value} inference failed: {e}")
            raise PredictionError(f"Error during {model_id.value} analysis: {e}")

        scores = np.asarray(prediction, dtype=np.float64).flatten()
        logger.debug(f"{model_id.value} raw scores: {np.round(scores, 4).tolist()}")
        return scores.tolist()

    def predict(self, image: Union[bytes, np.ndarray], model_id: ModelId) -> PredictionResult:
        """
        Full single-model pipeline: shape, infer, normalize.

        Args:
            image: Encoded image bytes or an RGB array
            model_id: Model to run

        Returns:
            PredictionResult
        """
        model_id = ModelId(model_id)
        model_input = shape(image, model_id)
        scores = self.infer(model_id, model_input)
        result = normalize(scores, model_id)

        logger.info(
            f"  {model_id.value} result: {result.condition_label} "
            f"(confidence: {result.confidence:.4f})"
        )
        return result
