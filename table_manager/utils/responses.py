"""
Standardized response utilities
"""

from typing import Any, Optional
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from table_manager.core.errors import ConflictError, NotFound, SeatingError, StorageError, ValidationError
from table_manager.schemas.common import StandardResponse, ErrorResponse

ERROR_STATUS_CODES = {
    ValidationError: 422,
    NotFound: 404,
    ConflictError: 409,
    StorageError: 500,
}

def success_response(
    message: str,
    data: Any = None,
    status_code: int = 200
) -> JSONResponse:
    """Create standardized success response"""
    response = StandardResponse(
        success=True,
        message=message,
        data=jsonable_encoder(data)
    )
    return JSONResponse(
        content=response.model_dump(),
        status_code=status_code
    )

def error_response(
    message: str,
    error_code: Optional[str] = None,
    details: Any = None,
    status_code: int = 400
) -> JSONResponse:
    """Create standardized error response"""
    response = ErrorResponse(
        message=message,
        error_code=error_code,
        details=jsonable_encoder(details)
    )
    return JSONResponse(
        content=response.model_dump(),
        status_code=status_code
    )

def seating_error_response(exc: SeatingError) -> JSONResponse:
    """Translate a classified failure into the error envelope"""
    status_code = 500
    for error_type, code in ERROR_STATUS_CODES.items():
        if isinstance(exc, error_type):
            status_code = code
            break
    return error_response(
        message=exc.message,
        error_code=exc.error_code,
        details=exc.details,
        status_code=status_code
    )

def rate_limit_error() -> JSONResponse:
    """Create rate limit error"""
    return error_response(
        message="Rate limit exceeded. Please try again later.",
        error_code="rate_limited",
        status_code=429
    )
