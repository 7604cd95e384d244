"""
Result normalization tests
"""
import pytest

from skin_in.classifier import ModelId, normalize
from skin_in.utils.exception import ScoreVectorError


class TestNormalize:

    def test_psoriasis(self):
        result = normalize([0.1, 0.05, 0.6, 0.2, 0.05], ModelId.CNN)

        assert result.condition == "Psoriasis"
        assert result.condition_label == "Psoriasis"
        assert result.class_id == 2
        assert result.confidence == pytest.approx(0.6)
        assert result.confidence_percent == 60
        assert result.recommendation.startswith("Use medicated creams")

    def test_tie_goes_to_lowest_index(self):
        result = normalize([0.4, 0.1, 0.4, 0.05, 0.05], ModelId.CNN)
        assert result.condition == "Acne"

    def test_nested_output_is_flattened(self):
        result = normalize([[0.0, 0.0, 0.0, 0.0, 1.0]], ModelId.CNN)
        assert result.condition == "Healthy Skin"

    def test_rnn_decoration(self):
        result = normalize([0.1, 0.05, 0.6, 0.2, 0.05], ModelId.RNN)
        assert result.condition_label == "Psoriasis Progression"
        assert result.recommendation.startswith("Based on temporal patterns: Use medicated")

    def test_gnn_decoration(self):
        result = normalize([0.1, 0.05, 0.6, 0.2, 0.05], ModelId.GNN)
        assert result.condition_label == "Psoriasis Network"
        assert result.recommendation.startswith("Based on lesion relationships: ")
        assert result.condition == "Psoriasis"

    def test_empty_scores(self):
        with pytest.raises(IndexError):
            normalize([], ModelId.CNN)

    def test_wrong_length(self):
        with pytest.raises(ScoreVectorError, match="expected 5"):
            normalize([0.5, 0.5], ModelId.CNN)

    def test_too_many_scores(self):
        with pytest.raises(IndexError):
            normalize([0.1] * 6, ModelId.GNN)

    def test_to_dict(self):
        data = normalize([0.1, 0.05, 0.6, 0.2, 0.05], ModelId.RNN).to_dict()
        assert data["model_id"] == "RNN"
        assert data["raw_scores"] == pytest.approx([0.1, 0.05, 0.6, 0.2, 0.05])
        assert data["class_id"] == 2

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_scores(self, bad):
        with pytest.raises(ScoreVectorError, match="non-finite"):
            normalize([bad, 0.1, 0.2, 0.3, 0.4], ModelId.CNN)
