"""
Custom Exception Module
This module defines the error taxonomy of the Skin-In analysis service.
"""

import sys
from typing import Optional


class CustomException(Exception):
    """Base exception class for the project"""

    def __init__(self, error_message: str, error_detail: Optional[sys.exc_info] = None):
        """
        Initialize custom exception with detailed error information

        Args:
            error_message: The error message
            error_detail: System exception info tuple (sys.exc_info())
        """
        super().__init__(error_message)
        self.error_message = error_message

        if error_detail is not None:
            self.error_message = self._get_detailed_error_message(error_message, error_detail)

    def _get_detailed_error_message(self, error_message: str, error_detail) -> str:
        """
        Generate detailed error message with file name and line number

        Args:
            error_message: Basic error message
            error_detail: System exception info

        Returns:
            Formatted error message with context
        """
        _, _, exc_tb = error_detail

        if exc_tb is not None:
            file_name = exc_tb.tb_frame.f_code.co_filename
            line_number = exc_tb.tb_lineno

            return f"Error occurred in script: [{file_name}] at line [{line_number}]: {error_message}"

        return error_message

    def __str__(self):
        return self.error_message


class LoadError(CustomException):
    """Raised when a model artifact cannot be loaded"""
    pass


class UnsupportedInputError(CustomException):
    """Raised when an upload has the wrong type or size"""
    pass


class PreprocessError(CustomException):
    """Raised when an image cannot be decoded or shaped"""
    pass


class NotLoadedError(CustomException):
    """Raised when inference is requested from a model that is not loaded"""
    pass


class ScoreVectorError(CustomException, IndexError):
    """Raised when a score vector is empty or does not match the condition catalog"""
    pass


class PredictionError(CustomException):
    """Raised when the inference runtime fails"""
    pass


class AnalysisInProgressError(CustomException):
    """Raised when an analysis is already running for the same session"""
    pass


class ConfigurationError(CustomException):
    """Raised for invalid configuration files"""
    pass


class ExportError(CustomException):
    """Raised when contact submissions cannot be exported"""
    pass
