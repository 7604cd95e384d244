"""Preprocessing package initialization"""
from .image_preprocessing import (
    GraphInput,
    ModelInput,
    load_image,
    load_image_from_bytes,
    build_adjacency,
    preprocess_cnn,
    preprocess_rnn,
    preprocess_gnn,
    shape
)
from .validation import validate_upload

__all__ = [
    "GraphInput",
    "ModelInput",
    "load_image",
    "load_image_from_bytes",
    "build_adjacency",
    "preprocess_cnn",
    "preprocess_rnn",
    "preprocess_gnn",
    "shape",
    "validate_upload"
]
