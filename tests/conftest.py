"""
Shared fixtures: fake model handles and registries that never touch disk.
"""
import asyncio
import os
import tempfile

os.environ.setdefault("SKIN_IN_LOGS_DIR", tempfile.mkdtemp(prefix="skin_in_logs_"))
os.environ.setdefault("CUDA_VISIBLE_DEVICES", "-1")
os.environ.setdefault("TF_CPP_MIN_LOG_LEVEL", "3")

import cv2
import numpy as np
import pytest

from skin_in.classifier import ModelId, ModelRegistry

PSORIASIS_SCORES = [0.1, 0.05, 0.6, 0.2, 0.05]


class FakeModel:
    """Stands in for a Keras model: records inputs, returns fixed scores."""

    def __init__(self, scores=None, error=None, before_predict=None):
        self.scores = PSORIASIS_SCORES if scores is None else scores
        self.error = error
        self.before_predict = before_predict
        self.calls = []

    def predict(self, inputs, verbose=0):
        self.calls.append(inputs)
        if self.before_predict is not None:
            self.before_predict()
        if self.error is not None:
            raise self.error
        return np.array([self.scores], dtype=np.float32)

    def __call__(self, inputs, training=False):
        return self.predict(inputs)


class FakeLoader:
    """Maps artifact paths to fake handles; paths listed in failing raise."""

    def __init__(self, handles, failing=()):
        self.handles = handles
        self.failing = set(failing)
        self.loaded_paths = []

    def __call__(self, artifact_path):
        self.loaded_paths.append(artifact_path)
        if artifact_path in self.failing:
            raise FileNotFoundError(f"Model artifact not found: {artifact_path}")
        return self.handles[artifact_path]


def artifact_for(model_id):
    return f"models/{model_id.value.lower()}.keras"


@pytest.fixture
def fake_models():
    return {model_id: FakeModel() for model_id in ModelId}


@pytest.fixture
def make_registry(fake_models):
    """Build a registry over fake_models; failing lists model ids whose load raises."""

    def _make(failing=(), load=True):
        loader = FakeLoader(
            {artifact_for(m): handle for m, handle in fake_models.items()},
            failing=[artifact_for(m) for m in failing],
        )
        registry = ModelRegistry(
            {m: artifact_for(m) for m in ModelId},
            loader=loader,
            descriptions={m: f"{m.value} test model" for m in ModelId},
        )
        if load:
            asyncio.run(registry.load_all())
        return registry

    return _make


@pytest.fixture
def registry(make_registry):
    return make_registry()


@pytest.fixture
def rgb_image():
    rng = np.random.default_rng(0)
    return rng.integers(0, 256, size=(300, 400, 3), dtype=np.uint8)


@pytest.fixture
def image_bytes(rgb_image):
    ok, encoded = cv2.imencode(".png", cv2.cvtColor(rgb_image, cv2.COLOR_RGB2BGR))
    assert ok
    return encoded.tobytes()
