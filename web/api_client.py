# web/api_client.py
"""
FastAPI Client Wrapper
======================
Handles all HTTP requests to the Skin-In FastAPI backend, plus small
display helpers used by the Streamlit page.
"""

import uuid
from io import BytesIO
from typing import Any, Dict, Optional, Tuple, Union

import requests

MAX_UPLOAD_BYTES = 5 * 1024 * 1024
VALID_EXTENSIONS = [".png", ".jpg", ".jpeg", ".bmp", ".gif", ".webp"]


def _error_detail(response: requests.Response) -> str:
    try:
        return response.json().get("detail", response.text)
    except ValueError:
        return response.text


class APIClient:
    """Client for the Skin-In FastAPI backend."""

    def __init__(self, base_url: str = "http://127.0.0.1:8000"):
        self.base_url = base_url.rstrip("/")
        self.timeout = 120  # model inference can be slow on CPU

    def health_check(self) -> Tuple[bool, Dict[str, Any]]:
        """
        Check API health.

        Returns:
            Tuple of (is_healthy, response_data)
        """
        try:
            response = requests.get(f"{self.base_url}/health", timeout=10)
            if response.status_code == 200:
                return True, response.json()
            return False, {"error": f"Status {response.status_code}"}
        except requests.exceptions.ConnectionError:
            return False, {"error": "Cannot connect to API server"}
        except requests.exceptions.Timeout:
            return False, {"error": "API request timed out"}
        except requests.exceptions.RequestException as e:
            return False, {"error": str(e)}

    def predict(
        self,
        image_bytes: bytes,
        filename: str,
        model_type: str,
        session_id: Optional[str] = None,
        mime_type: str = "image/png"
    ) -> Tuple[bool, Dict[str, Any]]:
        """
        Send image for prediction.

        Args:
            image_bytes: Image file content
            filename: Original filename
            model_type: One of CNN, RNN, GNN
            session_id: Client session identifier
            mime_type: Content type of the upload

        Returns:
            Tuple of (success, response_data)
        """
        files = {"file": (filename, BytesIO(image_bytes), mime_type)}
        data = {"model_type": model_type}
        if session_id:
            data["session_id"] = session_id

        try:
            response = requests.post(
                f"{self.base_url}/predict",
                files=files,
                data=data,
                timeout=self.timeout
            )
            if response.status_code == 200:
                return True, response.json()
            return False, {"error": _error_detail(response), "status_code": response.status_code}

        except requests.exceptions.ConnectionError:
            return False, {"error": "Cannot connect to API. Is the server running?"}
        except requests.exceptions.Timeout:
            return False, {"error": "Request timed out. The image may be too large."}
        except requests.exceptions.RequestException as e:
            return False, {"error": f"Request failed: {str(e)}"}

    def compare(
        self,
        image_bytes: bytes,
        filename: str,
        session_id: Optional[str] = None,
        mime_type: str = "image/png"
    ) -> Tuple[bool, Dict[str, Any]]:
        """
        Run every model on the image.

        Returns:
            Tuple of (success, response_data). response_data["available"] is
            False when the server does not have all models loaded.
        """
        files = {"file": (filename, BytesIO(image_bytes), mime_type)}
        data = {"session_id": session_id} if session_id else {}

        try:
            response = requests.post(
                f"{self.base_url}/compare",
                files=files,
                data=data,
                timeout=self.timeout
            )
            if response.status_code == 200:
                return True, response.json()
            return False, {"error": _error_detail(response), "status_code": response.status_code}

        except requests.exceptions.ConnectionError:
            return False, {"error": "Cannot connect to API server"}
        except requests.exceptions.Timeout:
            return False, {"error": "Model comparison timed out"}
        except requests.exceptions.RequestException as e:
            return False, {"error": f"Request failed: {str(e)}"}

    def submit_contact(self, name: str, email: str, message: str) -> Tuple[bool, Dict[str, Any]]:
        """Store a contact form submission on the server."""
        try:
            response = requests.post(
                f"{self.base_url}/contacts",
                json={"name": name, "email": email, "message": message},
                timeout=10
            )
            if response.status_code == 201:
                return True, response.json()
            return False, {"error": _error_detail(response)}
        except requests.exceptions.RequestException as e:
            return False, {"error": f"Request failed: {str(e)}"}

    def export_contacts(self, username: str, password: str) -> Tuple[bool, Union[bytes, Dict[str, Any]]]:
        """
        Download all server-side contact submissions as CSV.

        Credentials travel as HTTP Basic auth; use an https:// base URL.

        Returns:
            Tuple of (success, csv_bytes or error dict)
        """
        try:
            response = requests.get(
                f"{self.base_url}/contacts/export",
                auth=(username, password),
                timeout=30
            )
            if response.status_code == 200:
                return True, response.content
            return False, {"error": _error_detail(response), "status_code": response.status_code}
        except requests.exceptions.RequestException as e:
            return False, {"error": f"Error exporting contacts: {str(e)}"}


# Utility functions
def confidence_percent(confidence: float) -> int:
    """Confidence as a whole percentage, e.g. 0.604 -> 60."""
    return int(round(confidence * 100))


def format_confidence(confidence: float) -> str:
    """Format confidence as percentage string."""
    return f"{confidence_percent(confidence)}%"


def confidence_level(percent: int) -> str:
    """
    Meter color band for a confidence percentage.

    Returns:
        "low" below 50, "medium" below 75, otherwise "high"
    """
    if percent < 50:
        return "low"
    if percent < 75:
        return "medium"
    return "high"


def validate_image(file) -> Tuple[bool, str]:
    """
    Validate an uploaded image file before it is sent to the API.

    Args:
        file: Streamlit UploadedFile (name, type, size attributes)

    Returns:
        Tuple of (is_valid, error_message)
    """
    if file is None:
        return False, "Please upload an image first"

    mime_type = getattr(file, "type", "") or ""
    if not mime_type.startswith("image/"):
        return False, "Please upload an image file (JPG, PNG)"

    filename = file.name.lower()
    if not any(filename.endswith(ext) for ext in VALID_EXTENSIONS):
        return False, f"Invalid file type. Supported: {', '.join(VALID_EXTENSIONS)}"

    size = file.size
    if size > MAX_UPLOAD_BYTES:
        return False, "Image size should be less than 5MB"

    if size == 0:
        return False, "File is empty."

    return True, ""


def new_session_id() -> str:
    """Identifier the API uses to reject overlapping analyses from one browser session."""
    return uuid.uuid4().hex


def get_model_info(model_type: str) -> Dict[str, str]:
    """Description shown under the model selector."""
    info = {
        "CNN": {
            "title": "Convolutional Neural Network",
            "detects": "Image pattern recognition on the whole photo",
            "color": "#0891b2"
        },
        "RNN": {
            "title": "Recurrent Neural Network",
            "detects": "Temporal progression analysis over image patches",
            "color": "#6366f1"
        },
        "GNN": {
            "title": "Graph Neural Network",
            "detects": "Lesion relationship mapping between image patches",
            "color": "#10b981"
        }
    }
    return info[model_type]
