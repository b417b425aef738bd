# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Response envelope shared by the hashing endpoints.

Every response body is ``{"success": bool, "data"?: str, "error"?: str}``.
"""
from typing import Any, Optional

from fastapi import Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ApiResponse(BaseModel):
    """Outcome of a single operation."""
    success: bool = False
    data: Optional[str] = None
    error: Optional[str] = None
    
    @classmethod
    def ok(cls, data: Optional[str] = None) -> "ApiResponse":
        return cls(success=True, data=data)
    
    @classmethod
    def fail(cls, error: str) -> "ApiResponse":
        return cls(success=False, error=error)
    
    def envelope(self) -> dict[str, Any]:
        """Serialisable body with empty data and error omitted."""
        body: dict[str, Any] = {"success": self.success}
        if self.data:
            body["data"] = self.data
        if self.error:
            body["error"] = self.error
        return body


def send_response(status_code: int, outcome: ApiResponse, logger: Any) -> Response:
    """Render an outcome as a JSON response with the given status.
    
    Args:
        status_code: HTTP status code
        outcome: Operation outcome
        logger: structlog logger for encoding failures
        
    Returns:
        Response: JSON response; on encoding failure an empty body with the
            same status, since the status is already decided
    """
    try:
        return JSONResponse(status_code=status_code, content=outcome.envelope())
    except (TypeError, ValueError) as e:
        logger.error("response_encoding_failed", status_code=status_code, error=str(e))
        return Response(status_code=status_code, media_type=JSONResponse.media_type)
