"""
Core lookup logic for the GPS data gateway.

This module is framework-agnostic - it doesn't import FastAPI or boto3.
Key construction and the error taxonomy can be tested in isolation.
"""

from .errors import (
    GatewayError,
    InvalidMonthError,
    LocalIOError,
    MissingParametersError,
    ObjectStoreError,
    ValidationError,
)
from .keys import KeyLayout, LookupRequest, build_object_key, month_name

__all__ = [
    "GatewayError",
    "InvalidMonthError",
    "LocalIOError",
    "MissingParametersError",
    "ObjectStoreError",
    "ValidationError",
    "KeyLayout",
    "LookupRequest",
    "build_object_key",
    "month_name",
]
