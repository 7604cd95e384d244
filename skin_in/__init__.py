"""
Skin-In - Skin Condition Analysis
=================================

Upload a photo, run one of three pretrained classifiers (CNN, RNN, GNN)
and get the predicted skin condition with a confidence score and a care
recommendation.

Packages:
- classifier: model registry, prediction pipeline, comparison
- preprocessing: image decoding, upload validation, tensor shaping
- contacts: contact form storage and CSV export
- api: FastAPI service
"""

__version__ = "1.0.0"
