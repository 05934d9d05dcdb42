"""
Uniform response envelopes.

    success: {"success": true,  "message": "...", "data": ...}
    error:   {"success": false, "error": {"message": "...", "status": 404, ...}}
"""
from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def success_response(data: Any = None, message: str = "Success", status_code: int = 200) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": True, "message": message, "data": jsonable_encoder(data)},
    )


def error_response(message: str, status_code: int, **extra: Any) -> JSONResponse:
    error = {"message": message, "status": status_code}
    error.update({k: v for k, v in extra.items() if v is not None})
    return JSONResponse(status_code=status_code, content={"success": False, "error": error})
