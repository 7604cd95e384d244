"""
Predictor tests
"""
import asyncio

import numpy as np
import pytest
import tensorflow as tf

from skin_in.classifier import ModelId, ModelRegistry, Predictor
from skin_in.classifier.registry import load_keras_artifact
from skin_in.preprocessing import shape
from skin_in.utils.exception import NotLoadedError, PredictionError, ScoreVectorError


class TestPredictor:

    def test_cnn_pipeline(self, registry, fake_models, rgb_image):
        result = Predictor(registry).predict(rgb_image, ModelId.CNN)

        assert result.condition_label == "Psoriasis"
        (inputs,) = fake_models[ModelId.CNN].calls
        assert inputs.shape == (1, 224, 224, 3)

    def test_gnn_receives_nodes_and_adjacency(self, registry, fake_models, rgb_image):
        result = Predictor(registry).predict(rgb_image, ModelId.GNN)

        (inputs,) = fake_models[ModelId.GNN].calls
        assert isinstance(inputs, list)
        assert inputs[0].shape == (256, 768)
        assert inputs[1].shape == (256, 256)
        assert result.condition_label == "Psoriasis Network"

    def test_infer_returns_flat_scores(self, registry, rgb_image):
        scores = Predictor(registry).infer(ModelId.RNN, shape(rgb_image, ModelId.RNN))
        assert scores == pytest.approx([0.1, 0.05, 0.6, 0.2, 0.05])

    def test_unloaded_model(self, make_registry, fake_models, rgb_image):
        registry = make_registry(failing=[ModelId.CNN])
        with pytest.raises(NotLoadedError):
            Predictor(registry).infer(ModelId.CNN, shape(rgb_image, ModelId.CNN))
        assert fake_models[ModelId.CNN].calls == []

    def test_runtime_failure(self, registry, fake_models, rgb_image):
        fake_models[ModelId.RNN].error = RuntimeError("OOM")
        with pytest.raises(PredictionError, match="OOM"):
            Predictor(registry).predict(rgb_image, ModelId.RNN)

    def test_wrong_output_size(self, registry, fake_models, rgb_image):
        fake_models[ModelId.CNN].scores = [0.2, 0.8]
        with pytest.raises(ScoreVectorError):
            Predictor(registry).predict(rgb_image, ModelId.CNN)

    def test_non_finite_scores(self, registry, fake_models, rgb_image):
        fake_models[ModelId.CNN].scores = [float("nan"), 0.1, 0.2, 0.3, 0.4]
        with pytest.raises(ScoreVectorError, match="non-finite"):
            Predictor(registry).predict(rgb_image, ModelId.CNN)


class TinyGraphModel(tf.keras.Model):
    """One round of message passing over the full adjacency, mean-pooled over nodes."""

    def __init__(self):
        super().__init__()
        self.dense = tf.keras.layers.Dense(5)

    def call(self, inputs, training=False):
        nodes, adjacency = inputs
        messages = tf.matmul(adjacency, self.dense(nodes))
        return tf.nn.softmax(tf.reduce_mean(messages, axis=0))


class TestKerasModels:
    """Small real Keras models with the production input layouts"""

    @pytest.fixture
    def keras_registry(self, tmp_path):
        cnn = tf.keras.Sequential([
            tf.keras.Input(shape=(224, 224, 3)),
            tf.keras.layers.GlobalAveragePooling2D(),
            tf.keras.layers.Dense(5, activation="softmax"),
        ])
        rnn = tf.keras.Sequential([
            tf.keras.Input(shape=(8, 8, 3072)),
            tf.keras.layers.Reshape((64, 3072)),
            tf.keras.layers.SimpleRNN(8),
            tf.keras.layers.Dense(5, activation="softmax"),
        ])
        cnn.save(str(tmp_path / "cnn.keras"))
        rnn.save(str(tmp_path / "rnn.keras"))
        graph_model = TinyGraphModel()

        def loader(path):
            if path.endswith("gnn.keras"):
                return graph_model
            return load_keras_artifact(path)

        registry = ModelRegistry(
            {m: str(tmp_path / f"{m.value.lower()}.keras") for m in ModelId},
            loader=loader,
        )
        status = asyncio.run(registry.load_all())
        assert all(status.values())
        return registry

    @pytest.mark.parametrize("model_id", list(ModelId))
    def test_five_scores_per_model(self, keras_registry, rgb_image, model_id):
        result = Predictor(keras_registry).predict(rgb_image, model_id)

        assert len(result.raw_scores) == 5
        assert sum(result.raw_scores) == pytest.approx(1.0, abs=1e-4)

    def test_graph_is_one_forward_pass(self, keras_registry, rgb_image):
        graph = shape(rgb_image, ModelId.GNN)
        expected = keras_registry.handle_for(ModelId.GNN)(graph.as_model_inputs()).numpy()

        scores = Predictor(keras_registry).infer(ModelId.GNN, graph)

        np.testing.assert_allclose(scores, expected, rtol=1e-5)
