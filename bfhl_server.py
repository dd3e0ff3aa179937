"""
bfhl_server.py
--------------
FastAPI server for the /bfhl token classification endpoint.

    POST /bfhl   {"data": ["M", "1", "334", "4", "B"]}  -> numbers / alphabets / highest_alphabet
    GET  /bfhl   -> {"operation_code": 1}

The same routes are mounted under /api for deployments that prefix the API.
Identity fields (user id, email, roll number) come from the environment and
are handed to create_app(); they never depend on the request.

Run with:  uvicorn bfhl_server:app --host 0.0.0.0 --port 8000
"""

import logging
import os
import sys
from typing import Any, List, Optional

from fastapi import APIRouter, Body, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from classifier import (
    BfhlResponse,
    ErrorResponse,
    Identity,
    InvalidInputError,
    assemble_response,
    classify,
    validate,
)

# ------------------------------------------------------------------ config --

USER_ID = os.getenv("BFHL_USER_ID", "john_doe_17091999")
EMAIL = os.getenv("BFHL_EMAIL", "john@xyz.com")
ROLL_NUMBER = os.getenv("BFHL_ROLL_NUMBER", "ABCD123")
CORS_ORIGINS = [o.strip() for o in os.getenv("BFHL_CORS_ORIGINS", "*").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

INVALID_INPUT = "Invalid input format"
INTERNAL_ERROR = "Internal server error"

# ----------------------------------------------------------------- logging --

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger("bfhl")

# ------------------------------------------------------------------ routes --

router = APIRouter()


@router.get("/bfhl")
async def bfhl_get():
    return {"operation_code": 1}


@router.post("/bfhl", response_model=BfhlResponse, response_model_exclude_none=True,
             responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
async def bfhl_post(request: Request, payload: Any = Body(None)):
    tokens = validate(payload)
    result = classify(tokens)
    logger.info("POST %s - %d tokens -> numbers=%d alphabets=%d highest=%s",
                request.url.path, len(tokens), len(result.numbers),
                len(result.alphabets), result.highest_alphabet)
    return assemble_response(result, request.app.state.identity)


# ---------------------------------------------------------------- handlers --

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code,
                        content=ErrorResponse(message=message).model_dump())


async def _invalid_input(request: Request, exc: Exception):
    logger.warning("%s %s - rejected: %s", request.method, request.url.path, exc)
    return _error(400, INVALID_INPUT)


async def _unexpected(request: Request, exc: Exception):
    logger.error("%s %s - unhandled exception: %s", request.method,
                 request.url.path, exc, exc_info=exc)
    return _error(500, INTERNAL_ERROR)


# ------------------------------------------------------------------ server --

def create_app(identity: Optional[Identity] = None,
               cors_origins: Optional[List[str]] = None) -> FastAPI:
    app = FastAPI(title="BFHL Token Classifier", version="1.0")
    app.state.identity = identity or Identity(user_id=USER_ID, email=EMAIL,
                                              roll_number=ROLL_NUMBER)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS if cors_origins is None else cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.include_router(router)
    app.include_router(router, prefix="/api")
    app.add_exception_handler(InvalidInputError, _invalid_input)
    app.add_exception_handler(RequestValidationError, _invalid_input)
    app.add_exception_handler(Exception, _unexpected)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("bfhl_server:app", host="0.0.0.0", port=int(os.getenv("PORT", 8000)),
                log_level=LOG_LEVEL.lower())
