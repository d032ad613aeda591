from typing import Any, List, Optional
from fastapi import HTTPException
from fastapi.encoders import jsonable_encoder


class ValidationError(HTTPException):
    """Missing or malformed input. Nothing has been written."""

    def __init__(self, message: str, errors: Optional[List[Any]] = None):
        self.message = message
        detail: Any = message
        if errors:
            detail = jsonable_encoder({"message": message, "errors": errors})
        super().__init__(status_code=400, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, message: str):
        self.message = message
        super().__init__(status_code=404, detail=message)


class ConflictError(HTTPException):
    """A local booking or remote calendar event blocks the request.

    The blocking records travel with the error so callers can show them.
    """

    def __init__(self, message: str, conflicts: Optional[List[Any]] = None):
        self.message = message
        self.conflicts = conflicts or []
        super().__init__(
            status_code=409,
            detail=jsonable_encoder({"message": message, "conflicts": self.conflicts}),
        )


class IntegrationFailure(Exception):
    """The external calendar could not be reached or refused the call."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
