# skin_in/classifier/registry.py
"""
Model Registry
==============
Tracks the load state and inference handle of every declared model.

All artifacts are loaded concurrently. A model that fails to load is
recorded as unloaded and does not stop the others. There is no per-model
retry: calling load_all() again resets every descriptor and reloads them all.
"""

import asyncio
import os
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import tensorflow as tf

from skin_in.config import MODEL_CONFIGS, ModelId, Settings
from skin_in.utils.exception import LoadError, NotLoadedError
from skin_in.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class ModelDescriptor:
    id: ModelId
    artifact_path: str
    description: str = ""
    loaded: bool = False
    handle: Optional[Any] = None


def load_keras_artifact(artifact_path: str) -> Any:
    """
    Load a serialized Keras model (.keras, .h5 or SavedModel directory).

    Args:
        artifact_path: Path to the artifact

    Returns:
        Model object exposing predict()
    """
    if not os.path.exists(artifact_path):
        raise FileNotFoundError(f"Model artifact not found: {artifact_path}")

    model = tf.keras.models.load_model(artifact_path, compile=False)
    logger.info(f"  Loaded artifact: {artifact_path}")
    logger.info(f"  Parameters: {model.count_params():,}")
    return model


class ModelRegistry:
    """
    Holds one ModelDescriptor per model id.

    Usage:
        registry = ModelRegistry.from_settings(settings)
        status = await registry.load_all()
        model = registry.handle_for(ModelId.CNN)
    """

    def __init__(
        self,
        artifact_paths: Dict[ModelId, str],
        loader: Optional[Callable[[str], Any]] = None,
        descriptions: Optional[Dict[ModelId, str]] = None,
    ):
        """
        Args:
            artifact_paths: Artifact path per model id
            loader: Callable turning an artifact path into an inference handle;
                defaults to load_keras_artifact
            descriptions: Optional human-readable description per model id
        """
        descriptions = descriptions or {}
        self._loader = loader or load_keras_artifact
        self._descriptors: Dict[ModelId, ModelDescriptor] = {
            model_id: ModelDescriptor(
                id=model_id,
                artifact_path=path,
                description=descriptions.get(model_id, ""),
            )
            for model_id, path in artifact_paths.items()
        }

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        loader: Optional[Callable[[str], Any]] = None,
    ) -> "ModelRegistry":
        """Build a registry for every model in the model table."""
        paths = {ModelId(key): settings.artifact_path(key) for key in MODEL_CONFIGS}
        descriptions = {ModelId(key): cfg["description"] for key, cfg in MODEL_CONFIGS.items()}
        return cls(paths, loader=loader, descriptions=descriptions)

    @property
    def model_ids(self) -> List[ModelId]:
        return list(self._descriptors)

    def descriptor(self, model_id: ModelId) -> ModelDescriptor:
        valid = [m.value for m in self._descriptors]
        try:
            model_id = ModelId(model_id)
        except ValueError:
            raise ValueError(f"Unknown model id: {model_id}. Must be one of {valid}")
        if model_id not in self._descriptors:
            raise ValueError(f"Unknown model id: {model_id.value}. Must be one of {valid}")
        return self._descriptors[model_id]

    def descriptors(self) -> List[ModelDescriptor]:
        return list(self._descriptors.values())

    def _load_artifact(self, descriptor: ModelDescriptor) -> Any:
        try:
            return self._loader(descriptor.artifact_path)
        except Exception as e:
            raise LoadError(f"Failed to load {descriptor.id.value} model from {descriptor.artifact_path}: {e}")

    async def _load_one(self, descriptor: ModelDescriptor) -> bool:
        try:
            handle = await asyncio.to_thread(self._load_artifact, descriptor)
        except LoadError as e:
            logger.error(str(e))
            descriptor.loaded = False
            descriptor.handle = None
            return False

        descriptor.handle = handle
        descriptor.loaded = True
        logger.info(f"{descriptor.id.value} model loaded successfully")
        return True

    async def load_all(self) -> Dict[ModelId, bool]:
        """
        Load every declared artifact concurrently.

        Returns:
            Mapping of model id to load success. Settles only after every
            attempt has finished.
        """
        logger.info(f"Loading models: {[m.value for m in self._descriptors]}")

        for descriptor in self._descriptors.values():
            descriptor.loaded = False
            descriptor.handle = None

        descriptors = list(self._descriptors.values())
        outcomes = await asyncio.gather(*(self._load_one(d) for d in descriptors))
        status = {d.id: ok for d, ok in zip(descriptors, outcomes)}

        loaded = [m.value for m, ok in status.items() if ok]
        logger.info(f"Models ready: {len(loaded)}/{len(status)} {loaded}")
        return status

    def is_loaded(self, model_id: ModelId) -> bool:
        return self.descriptor(model_id).loaded

    def all_loaded(self) -> bool:
        return all(d.loaded for d in self._descriptors.values())

    def handle_for(self, model_id: ModelId) -> Any:
        """
        Inference handle of a loaded model.

        Raises:
            NotLoadedError: If the model has not been loaded successfully
        """
        descriptor = self.descriptor(model_id)
        if not descriptor.loaded:
            raise NotLoadedError(f"{descriptor.id.value} model is not available. Please try another model.")
        return descriptor.handle

    def status(self) -> Dict[ModelId, bool]:
        return {model_id: d.loaded for model_id, d in self._descriptors.items()}
