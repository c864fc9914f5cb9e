"""Core types shared by every rlz package."""

from .errors import ErrorCode
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
