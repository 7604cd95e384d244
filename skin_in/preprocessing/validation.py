# skin_in/preprocessing/validation.py
"""
Upload validation. Runs before any model is touched.
"""

import os
from typing import Optional, Sequence

from skin_in.config import MAX_UPLOAD_BYTES, ALLOWED_EXTENSIONS
from skin_in.utils.exception import UnsupportedInputError


def validate_upload(
    data: bytes,
    filename: Optional[str],
    content_type: Optional[str],
    max_bytes: int = MAX_UPLOAD_BYTES,
    allowed_extensions: Sequence[str] = ALLOWED_EXTENSIONS
) -> None:
    """
    Reject uploads that are not images or exceed the size limit.

    Raises:
        UnsupportedInputError: With a message suitable for the end user
    """
    if not content_type or not content_type.startswith("image/"):
        raise UnsupportedInputError("Please upload an image file (JPG, PNG)")

    if filename:
        ext = os.path.splitext(filename)[1].lower()
        if ext not in allowed_extensions:
            raise UnsupportedInputError(f"Invalid file type. Supported: {', '.join(allowed_extensions)}")

    if not data:
        raise UnsupportedInputError("File is empty.")

    if len(data) > max_bytes:
        raise UnsupportedInputError(f"Image size should be less than {max_bytes // (1024 * 1024)}MB")
