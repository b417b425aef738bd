# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Hash and verify endpoints.

Provides two operations over form-encoded input:
- POST /hash: derive a bcrypt hash from ``raw`` at work factor ``cost``
- POST /verify: check ``raw`` against a previously issued ``hash``

Assumptions:
- Both paths accept every method so the handler answers 405 itself
- Internal causes (bcrypt errors, mismatch vs malformed hash) are logged,
  never returned to the caller
- bcrypt runs in the threadpool so the event loop stays responsive
"""
from typing import Any, Optional

from fastapi import APIRouter, Request, Response, status
from starlette.concurrency import run_in_threadpool

from passhash.api.forms import (
    DecodeError, ValidationError, decode_fields, parse_cost, require_fields
)
from passhash.api.middleware import remote_addr, with_logging
from passhash.api.responses import ApiResponse, send_response
from passhash.config import Settings
from passhash.hashing import HashingError, MalformedHashError, check_password, hash_password

MSG_METHOD_NOT_ALLOWED = "Method not allowed"
MSG_INVALID_REQUEST = "Invalid request"
MSG_MISSING_HASH_PARAMS = "Missing raw or cost params"
MSG_MISSING_VERIFY_PARAMS = "Missing raw or hash params"
MSG_INVALID_COST = "Invalid cost"
MSG_HASH_FAILED = "Failed to generate hash"
MSG_INVALID_PASSWORD = "Invalid password"


async def handle_hash(
    request: Request,
    logger: Any,
    max_cost: Optional[int] = None
) -> Response:
    """Generate a bcrypt hash for the ``raw`` field.
    
    Args:
        request: Incoming request
        logger: structlog logger for internal failure causes
        max_cost: Optional upper bound on the requested cost
        
    Returns:
        Response: 200 with the hash as ``data``, or an error envelope
            (405, 400, 500)
    """
    if request.method != "POST":
        return send_response(
            status.HTTP_405_METHOD_NOT_ALLOWED, ApiResponse.fail(MSG_METHOD_NOT_ALLOWED), logger
        )
    
    try:
        fields = await decode_fields(request)
    except DecodeError as e:
        logger.info("request_decode_failed", path=request.url.path, reason=str(e))
        return send_response(
            status.HTTP_400_BAD_REQUEST, ApiResponse.fail(MSG_INVALID_REQUEST), logger
        )
    
    try:
        params = require_fields(fields, ("raw", "cost"))
    except ValidationError:
        return send_response(
            status.HTTP_400_BAD_REQUEST, ApiResponse.fail(MSG_MISSING_HASH_PARAMS), logger
        )
    
    try:
        cost = parse_cost(params["cost"], max_cost=max_cost)
    except ValidationError as e:
        logger.info("invalid_cost", reason=e.reason)
        return send_response(
            status.HTTP_400_BAD_REQUEST, ApiResponse.fail(MSG_INVALID_COST), logger
        )
    
    try:
        password_hash = await run_in_threadpool(hash_password, params["raw"], cost)
    except HashingError as e:
        logger.warning("hash_generation_failed", cost=cost, reason=str(e))
        return send_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, ApiResponse.fail(MSG_HASH_FAILED), logger
        )
    
    return send_response(status.HTTP_200_OK, ApiResponse.ok(password_hash), logger)


async def handle_verify(request: Request, logger: Any) -> Response:
    """Check the ``raw`` field against the ``hash`` field.
    
    Args:
        request: Incoming request
        logger: structlog logger for rejected verifications
        
    Returns:
        Response: 200 with no data on a match, otherwise an error envelope
            (405, 400)
        
    Assumptions:
    - Mismatch and malformed hash share one caller-facing message
    """
    if request.method != "POST":
        return send_response(
            status.HTTP_405_METHOD_NOT_ALLOWED, ApiResponse.fail(MSG_METHOD_NOT_ALLOWED), logger
        )
    
    try:
        fields = await decode_fields(request)
    except DecodeError as e:
        logger.info("request_decode_failed", path=request.url.path, reason=str(e))
        return send_response(
            status.HTTP_400_BAD_REQUEST, ApiResponse.fail(MSG_INVALID_REQUEST), logger
        )
    
    try:
        params = require_fields(fields, ("raw", "hash"))
    except ValidationError:
        return send_response(
            status.HTTP_400_BAD_REQUEST, ApiResponse.fail(MSG_MISSING_VERIFY_PARAMS), logger
        )
    
    try:
        matched = await run_in_threadpool(check_password, params["raw"], params["hash"])
        reason = "mismatch"
    except MalformedHashError:
        matched = False
        reason = "malformed_hash"
    
    if not matched:
        logger.warning("verification_rejected", remote_addr=remote_addr(request), reason=reason)
        return send_response(
            status.HTTP_400_BAD_REQUEST, ApiResponse.fail(MSG_INVALID_PASSWORD), logger
        )
    
    return send_response(status.HTTP_200_OK, ApiResponse.ok(), logger)


def create_router(settings: Settings, logger: Any) -> APIRouter:
    """Build the router for /hash and /verify.
    
    Args:
        settings: Application settings (max_cost)
        logger: structlog logger shared by handlers and the logging wrapper
        
    Returns:
        APIRouter: Router with both endpoints registered
    """
    router = APIRouter(tags=["hashing"])
    
    async def hash_endpoint(request: Request) -> Response:
        return await handle_hash(request, logger, max_cost=settings.max_cost)
    
    async def verify_endpoint(request: Request) -> Response:
        return await handle_verify(request, logger)
    
    for path, endpoint in (("/hash", hash_endpoint), ("/verify", verify_endpoint)):
        wrapped = with_logging(logger, endpoint)
        name = path.lstrip("/")
        router.add_api_route(path, wrapped, methods=["POST"], name=name)
        # No method list: every other verb reaches the handler, which answers 405
        router.add_route(path, wrapped, name=f"{name}_other", include_in_schema=False)
    return router
