"""
Pydantic schemas package
"""

from .common import *
from .guest import *

__all__ = [
    "StandardResponse",
    "ErrorResponse",
    "StatusResponse",
    "GuestRecord",
    "GuestCreate",
    "GuestUpdate",
    "GuestSummary",
]
