# skin_in/config.py
"""
Service Configuration
=====================
Model table, preprocessing constants and runtime settings.

Defaults live in this module. A YAML file (configs/skin_in.yaml, or the path
in $SKIN_IN_CONFIG) can override the runtime settings, and environment
variables override both.
"""

import os
from enum import Enum
from pathlib import Path
from typing import Dict, Any, Optional, List

import yaml
from pydantic import BaseModel, Field, ValidationError

from skin_in.utils.exception import ConfigurationError
from skin_in.utils.logger import get_logger

logger = get_logger(__name__)


# =====================================================
# MODEL TABLE
# =====================================================
class ModelId(str, Enum):
    """Model identifiers; the value is what clients send as model_type."""

    CNN = "CNN"
    RNN = "RNN"
    GNN = "GNN"


MODELS_DIR = "models"

MODEL_CONFIGS: Dict[str, Dict[str, Any]] = {
    "CNN": {
        "artifact": "cnn/skin_cnn.keras",
        "description": "Convolutional Neural Network for image pattern recognition",
        "family": "single_frame",
    },
    "RNN": {
        "artifact": "rnn/skin_rnn.keras",
        "description": "Recurrent Neural Network for temporal progression analysis",
        "family": "sequence",
    },
    "GNN": {
        "artifact": "gnn/skin_gnn.keras",
        "description": "Graph Neural Network for lesion relationship mapping",
        "family": "graph",
    },
}


# =====================================================
# PREPROCESSING CONSTANTS
# =====================================================
CNN_IMAGE_SIZE = 224
CNN_CHANNEL_MEAN = (0.485, 0.456, 0.406)
CNN_CHANNEL_STD = (0.229, 0.224, 0.225)

RNN_IMAGE_SIZE = 256
RNN_PATCH_SIZE = 32

GNN_IMAGE_SIZE = 256
GNN_PATCH_SIZE = 16


# =====================================================
# UPLOAD LIMITS
# =====================================================
MAX_UPLOAD_BYTES = 5 * 1024 * 1024
ALLOWED_EXTENSIONS = [".png", ".jpg", ".jpeg", ".bmp", ".gif", ".webp"]


DEFAULT_CONFIG_PATH = Path("configs") / "skin_in.yaml"


class Settings(BaseModel):
    """Runtime settings resolved from defaults, YAML and environment."""

    models_dir: str = MODELS_DIR
    artifacts: Dict[str, str] = Field(
        default_factory=lambda: {key: cfg["artifact"] for key, cfg in MODEL_CONFIGS.items()}
    )
    max_upload_bytes: int = Field(MAX_UPLOAD_BYTES, gt=0)
    allowed_extensions: List[str] = Field(default_factory=lambda: list(ALLOWED_EXTENSIONS))
    admin_username: str = "admin"
    admin_password: Optional[str] = None
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    def artifact_path(self, model_id: str) -> str:
        """Full path of a model artifact inside the models directory."""
        return os.path.join(self.models_dir, self.artifacts[model_id])


def _read_yaml(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        logger.error(f"Invalid YAML in {config_path}: {e}")
        raise ConfigurationError(f"Invalid configuration file {config_path}: {e}")

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {config_path} must contain a mapping")
    return data


def load_settings(config_path: Optional[str] = None) -> Settings:
    """
    Resolve runtime settings.

    Args:
        config_path: Optional YAML file. Falls back to $SKIN_IN_CONFIG, then
            configs/skin_in.yaml if it exists.

    Returns:
        Settings instance

    Raises:
        ConfigurationError: If the YAML file is malformed or holds invalid values
    """
    values: Dict[str, Any] = {}

    path = config_path or os.environ.get("SKIN_IN_CONFIG")
    if path is None and DEFAULT_CONFIG_PATH.exists():
        path = str(DEFAULT_CONFIG_PATH)

    if path is not None:
        if not os.path.exists(path):
            raise ConfigurationError(f"Configuration file not found: {path}")
        data = _read_yaml(Path(path))
        logger.debug(f"Loaded configuration: {path}")

        artifacts = data.pop("artifacts", None)
        if artifacts:
            unknown = set(artifacts) - set(MODEL_CONFIGS)
            if unknown:
                raise ConfigurationError(f"Unknown model ids in artifacts: {sorted(unknown)}")
            merged = {key: cfg["artifact"] for key, cfg in MODEL_CONFIGS.items()}
            merged.update(artifacts)
            values["artifacts"] = merged

        values.update(data)

    # Environment takes precedence over the file
    if os.environ.get("SKIN_IN_MODELS_DIR"):
        values["models_dir"] = os.environ["SKIN_IN_MODELS_DIR"]
    if os.environ.get("SKIN_IN_ADMIN_PASSWORD"):
        values["admin_password"] = os.environ["SKIN_IN_ADMIN_PASSWORD"]

    try:
        return Settings(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}")
