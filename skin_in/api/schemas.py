# skin_in/api/schemas.py
"""
Pydantic Request/Response Models for FastAPI
============================================
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Health check response."""
    model_config = ConfigDict(protected_namespaces=())

    status: str = "healthy"
    version: str = "1.0.0"
    models_loaded: Dict[str, bool] = {}
    all_models_loaded: bool = False


class ModelInfo(BaseModel):
    """One registry entry."""
    model_config = ConfigDict(protected_namespaces=())

    model_id: str
    description: str
    artifact_path: str
    loaded: bool


class PredictionResponse(BaseModel):
    """Prediction response schema."""
    model_id: str = Field(..., description="Model that produced the result (CNN, RNN, GNN)")
    condition_label: str = Field(..., description="Display label, decorated per model family")
    condition: str = Field(..., description="Catalog condition name")
    class_id: int = Field(..., description="Predicted class index")
    confidence: float = Field(..., description="Score of the predicted class (post-softmax)")
    recommendation: str = Field(..., description="Care recommendation")
    raw_scores: List[float] = Field(..., description="All class scores in catalog order")

    model_config = ConfigDict(
        protected_namespaces=(),
        json_schema_extra={
            "example": {
                "model_id": "CNN",
                "condition_label": "Psoriasis",
                "condition": "Psoriasis",
                "class_id": 2,
                "confidence": 0.6,
                "recommendation": "Use medicated creams with salicylic acid or coal tar. "
                                  "Phototherapy may help in severe cases.",
                "raw_scores": [0.1, 0.05, 0.6, 0.2, 0.05]
            }
        }
    )


class ComparisonResponse(BaseModel):
    """All-model comparison. available=False always comes with no results."""
    available: bool
    results: List[PredictionResponse] = []
    missing: List[str] = []


class ContactRequest(BaseModel):
    """Contact form payload."""
    name: str
    email: str
    message: str


class ContactResponse(BaseModel):
    """Stored contact submission."""
    name: str
    email: str
    message: str
    timestamp: str


class ErrorResponse(BaseModel):
    """Error response schema."""
    error: str
    detail: Optional[str] = None
