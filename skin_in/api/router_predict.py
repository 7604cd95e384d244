# skin_in/api/router_predict.py
"""
Prediction Router
=================
POST /predict  - single-model analysis
POST /compare  - all-model comparison
"""

from typing import Optional
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from skin_in.api.dependencies import get_analyzer, get_settings
from skin_in.api.schemas import ComparisonResponse, ErrorResponse, PredictionResponse
from skin_in.classifier import SkinAnalyzer
from skin_in.config import Settings
from skin_in.preprocessing import validate_upload
from skin_in.utils.exception import (
    AnalysisInProgressError,
    NotLoadedError,
    PredictionError,
    PreprocessError,
    ScoreVectorError,
    UnsupportedInputError,
)
from skin_in.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Prediction"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


async def _read_validated_upload(file: UploadFile, settings: Settings) -> bytes:
    # at most one byte past the limit is buffered
    content = await file.read(settings.max_upload_bytes + 1)
    try:
        validate_upload(
            content,
            file.filename,
            file.content_type,
            max_bytes=settings.max_upload_bytes,
            allowed_extensions=settings.allowed_extensions,
        )
    except UnsupportedInputError as e:
        logger.warning(f"Upload rejected ({file.filename}): {e}")
        raise HTTPException(status_code=400, detail=str(e))
    return content


def _to_http_exception(error: Exception) -> HTTPException:
    """Map pipeline errors to the single user-facing error message."""
    if isinstance(error, AnalysisInProgressError):
        return HTTPException(status_code=409, detail=str(error))
    if isinstance(error, NotLoadedError):
        return HTTPException(status_code=503, detail=str(error))
    if isinstance(error, (PreprocessError, ValueError)):
        return HTTPException(status_code=400, detail=str(error))
    if isinstance(error, (ScoreVectorError, PredictionError)):
        return HTTPException(status_code=500, detail=str(error))
    return HTTPException(status_code=500, detail=f"Error analyzing image. Please try another image. ({error})")


@router.post(
    "/predict",
    response_model=PredictionResponse,
    responses=ERROR_RESPONSES,
    summary="Predict skin condition from image",
    description="Upload an image and get the predicted skin condition from the selected model."
)
async def predict(
    file: UploadFile = File(..., description="Image file to analyze"),
    model_type: str = Form(..., description="Model: CNN, RNN or GNN"),
    session_id: Optional[str] = Form(None, description="Client session; overlapping requests are rejected"),
    analyzer: SkinAnalyzer = Depends(get_analyzer),
    settings: Settings = Depends(get_settings),
):
    """
    Predict skin condition from uploaded image.

    - **file**: Image file (PNG, JPG, JPEG), at most 5MB
    - **model_type**: One of `CNN`, `RNN`, `GNN`
    - **session_id**: Optional client session identifier
    """
    content = await _read_validated_upload(file, settings)

    try:
        result = await analyzer.analyze(content, model_type, session_key=session_id)
    except Exception as e:
        logger.error(f"{model_type} analysis error: {e}")
        raise _to_http_exception(e)

    return PredictionResponse(**result.to_dict())


@router.post(
    "/compare",
    response_model=ComparisonResponse,
    responses=ERROR_RESPONSES,
    summary="Compare all models on one image",
    description="Runs every model on the image. Returns available=false when any model is not loaded."
)
async def compare(
    file: UploadFile = File(..., description="Image file to analyze"),
    session_id: Optional[str] = Form(None, description="Client session; overlapping requests are rejected"),
    analyzer: SkinAnalyzer = Depends(get_analyzer),
    settings: Settings = Depends(get_settings),
):
    content = await _read_validated_upload(file, settings)

    try:
        comparison = await analyzer.compare(content, session_key=session_id)
    except Exception as e:
        logger.error(f"Comparison error: {e}")
        raise _to_http_exception(e)

    return ComparisonResponse(**comparison.to_dict())
