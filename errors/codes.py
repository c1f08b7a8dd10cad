"""
Error code catalog for the JWeb health service.

This module defines all error codes surfaced to HTTP callers. Health check
failures are not errors at this level: they are reported inside the health
payload with a 503 status. Only request-level problems appear here.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """
    Enumeration of all error codes used in the application.
    
    Each error code maps to a specific HTTP status code:
    - Request errors (4xx): Client request issues, unknown components
    - Internal errors (5xx): Server-side issues
    """
    
    # Request errors (4xx)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    """Request payload validation failed (HTTP 400)"""
    
    INVALID_REQUEST = "INVALID_REQUEST"
    """Malformed request structure (HTTP 400)"""
    
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    """Requested resource or health component does not exist (HTTP 404)"""
    
    # Internal errors (5xx)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    """Unexpected server error (HTTP 500)"""


# Mapping of error codes to their default HTTP status codes
ERROR_CODE_STATUS_MAP: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.INVALID_REQUEST: 400,
    ErrorCode.RESOURCE_NOT_FOUND: 404,
    ErrorCode.INTERNAL_ERROR: 500,
}


def get_default_status_code(error_code: ErrorCode) -> int:
    """
    Get the default HTTP status code for an error code.
    
    Args:
        error_code: The error code to look up
        
    Returns:
        The default HTTP status code for the error code
    """
    return ERROR_CODE_STATUS_MAP.get(error_code, 500)
