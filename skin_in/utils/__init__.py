"""Utils package initialization"""
from .logger import get_logger, log_function_call, set_console_level
from .exception import (
    CustomException,
    LoadError,
    UnsupportedInputError,
    PreprocessError,
    NotLoadedError,
    ScoreVectorError,
    PredictionError,
    AnalysisInProgressError,
    ConfigurationError,
    ExportError
)

__all__ = [
    'get_logger',
    'log_function_call',
    'set_console_level',
    'CustomException',
    'LoadError',
    'UnsupportedInputError',
    'PreprocessError',
    'NotLoadedError',
    'ScoreVectorError',
    'PredictionError',
    'AnalysisInProgressError',
    'ConfigurationError',
    'ExportError'
]
