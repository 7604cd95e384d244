# skin_in/preprocessing/image_preprocessing.py
"""
Image Preprocessing
===================
Model-family specific tensor shaping for inference.

- CNN (single frame): resize, ImageNet mean/std normalization, batch axis
  -> (1, 224, 224, 3)
- RNN (sequence): resize, 32x32 non-overlapping patches read as time steps
  -> (1, 8, 8, 3072)
- GNN (graph): resize, 16x16 patches as node features plus an adjacency
  matrix -> nodes (256, 768), adjacency (256, 256)

Every function here is a pure function of its arguments.
"""

import os
from dataclasses import dataclass
from typing import Tuple, Union

import cv2
import numpy as np
import tensorflow as tf

from skin_in.config import (
    ModelId,
    CNN_IMAGE_SIZE,
    CNN_CHANNEL_MEAN,
    CNN_CHANNEL_STD,
    RNN_IMAGE_SIZE,
    RNN_PATCH_SIZE,
    GNN_IMAGE_SIZE,
    GNN_PATCH_SIZE,
)
from skin_in.utils.exception import PreprocessError
from skin_in.utils.logger import get_logger, log_function_call

logger = get_logger(__name__)

FULLY_CONNECTED = "fully_connected"
INFERRED = "inferred"


@dataclass(frozen=True)
class GraphInput:
    """
    Node features and adjacency for the graph model.

    structure_inferred is False while the adjacency is the fully connected
    placeholder rather than a relation computed from the image.
    """
    node_features: np.ndarray
    adjacency: np.ndarray
    structure_inferred: bool = False

    @property
    def num_nodes(self) -> int:
        return int(self.node_features.shape[0])

    def as_model_inputs(self) -> list:
        return [self.node_features, self.adjacency]


ModelInput = Union[np.ndarray, GraphInput]


# =====================================================
# IMAGE LOADING
# =====================================================
def load_image(image_path: str) -> np.ndarray:
    """
    Load image from file path.

    Args:
        image_path: Path to image file

    Returns:
        RGB image as numpy array (H, W, 3)
    """
    if not os.path.exists(image_path):
        raise FileNotFoundError(f"Image not found: {image_path}")

    img = cv2.imread(image_path, cv2.IMREAD_COLOR)
    if img is None:
        raise PreprocessError(f"Cannot read image: {image_path}")

    return cv2.cvtColor(img, cv2.COLOR_BGR2RGB)


def load_image_from_bytes(image_bytes: bytes) -> np.ndarray:
    """
    Decode an uploaded image.

    Raises:
        PreprocessError: If the bytes are not a decodable image
    """
    if not image_bytes:
        raise PreprocessError("Cannot decode image: empty payload")

    nparr = np.frombuffer(image_bytes, np.uint8)
    img = cv2.imdecode(nparr, cv2.IMREAD_COLOR)
    if img is None:
        raise PreprocessError("Cannot decode image from bytes")
    return cv2.cvtColor(img, cv2.COLOR_BGR2RGB)


def _as_rgb_array(image: Union[bytes, np.ndarray]) -> np.ndarray:
    if isinstance(image, (bytes, bytearray)):
        return load_image_from_bytes(bytes(image))

    image = np.asarray(image)
    if image.ndim != 3 or image.shape[2] != 3 or image.shape[0] == 0 or image.shape[1] == 0:
        raise PreprocessError(f"Expected an RGB image of shape (H, W, 3), got {image.shape}")
    return image


# =====================================================
# TENSOR HELPERS
# =====================================================
def resize_nearest(img: np.ndarray, size: int) -> np.ndarray:
    """Nearest-neighbour resize to a size x size square, as float32."""
    resized = cv2.resize(img, (size, size), interpolation=cv2.INTER_NEAREST)
    return resized.astype(np.float32)


def normalize_channels(
    img: np.ndarray,
    mean: Tuple[float, float, float] = CNN_CHANNEL_MEAN,
    std: Tuple[float, float, float] = CNN_CHANNEL_STD
) -> np.ndarray:
    """
    Scale pixels to [0, 1] and standardize each channel.

    Args:
        img: Float image (H, W, 3) in 0-255 range
        mean: Per-channel mean
        std: Per-channel standard deviation

    Returns:
        Normalized float32 image
    """
    img = img / 255.0
    img = (img - np.array(mean, dtype=np.float32).reshape(1, 1, 3)) / np.array(std, dtype=np.float32).reshape(1, 1, 3)
    return img.astype(np.float32)


def extract_patches(img: np.ndarray, patch_size: int) -> np.ndarray:
    """
    Split an image into a grid of non-overlapping square patches.

    Args:
        img: Float image (H, W, 3)
        patch_size: Patch edge length; also used as the stride

    Returns:
        Array (1, H // patch_size, W // patch_size, patch_size * patch_size * 3)
    """
    patches = tf.image.extract_patches(
        images=tf.expand_dims(tf.convert_to_tensor(img, dtype=tf.float32), axis=0),
        sizes=[1, patch_size, patch_size, 1],
        strides=[1, patch_size, patch_size, 1],
        rates=[1, 1, 1, 1],
        padding="VALID",
    )
    return patches.numpy()


def build_adjacency(num_nodes: int, policy: str = FULLY_CONNECTED) -> np.ndarray:
    """
    Adjacency matrix for the graph model.

    Only the fully connected placeholder exists: every node is linked to
    every node, itself included, and nothing is derived from the image.

    Raises:
        NotImplementedError: For any policy other than "fully_connected"
    """
    if policy == INFERRED:
        raise NotImplementedError("unimplemented: graph structure inference")
    if policy != FULLY_CONNECTED:
        raise ValueError(f"Unknown adjacency policy: {policy}")
    return np.ones((num_nodes, num_nodes), dtype=np.float32)


# =====================================================
# MODEL-SPECIFIC PREPROCESSING
# =====================================================
def preprocess_cnn(img: np.ndarray, image_size: int = CNN_IMAGE_SIZE) -> np.ndarray:
    """
    Preprocess an RGB image for the CNN.

    Returns:
        Normalized image batch (1, image_size, image_size, 3)
    """
    tensor = resize_nearest(img, image_size)
    tensor = normalize_channels(tensor)
    return np.expand_dims(tensor, axis=0)


def preprocess_rnn(
    img: np.ndarray,
    image_size: int = RNN_IMAGE_SIZE,
    patch_size: int = RNN_PATCH_SIZE
) -> np.ndarray:
    """
    Preprocess an RGB image for the RNN.

    Patches are taken from raw 0-255 float pixels; the model reads the
    patch grid as a sequence of time steps.

    Returns:
        Patch tensor (1, rows, cols, patch_size * patch_size * 3)
    """
    tensor = resize_nearest(img, image_size)
    return extract_patches(tensor, patch_size)


def preprocess_gnn(
    img: np.ndarray,
    image_size: int = GNN_IMAGE_SIZE,
    patch_size: int = GNN_PATCH_SIZE,
    adjacency_policy: str = FULLY_CONNECTED
) -> GraphInput:
    """Preprocess an RGB image for the GNN: one node per patch."""
    tensor = resize_nearest(img, image_size)
    patches = extract_patches(tensor, patch_size)

    num_nodes = patches.shape[1] * patches.shape[2]
    node_features = patches.reshape(num_nodes, -1)
    adjacency = build_adjacency(num_nodes, policy=adjacency_policy)

    logger.warning(
        f"GNN adjacency is a fully connected placeholder ({num_nodes} nodes); "
        "graph structure inference is not implemented"
    )
    return GraphInput(node_features=node_features, adjacency=adjacency, structure_inferred=False)


_PREPROCESSORS = {
    ModelId.CNN: preprocess_cnn,
    ModelId.RNN: preprocess_rnn,
    ModelId.GNN: preprocess_gnn,
}


@log_function_call
def shape(image: Union[bytes, np.ndarray], model_id: ModelId) -> ModelInput:
    """
    Shape an image into the input expected by a model.

    Args:
        image: Encoded image bytes or an RGB array (H, W, 3)
        model_id: Target model

    Returns:
        np.ndarray for CNN/RNN, GraphInput for GNN

    Raises:
        PreprocessError: If the image cannot be decoded
        ValueError: If model_id is unknown
    """
    try:
        model_id = ModelId(model_id)
    except ValueError:
        raise ValueError(f"Unknown model id: {model_id}. Must be one of {[m.value for m in ModelId]}")

    img = _as_rgb_array(image)
    return _PREPROCESSORS[model_id](img)
