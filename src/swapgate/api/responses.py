"""JSON envelope helpers: every body carries an ``ok`` flag."""

from typing import Any

from fastapi.responses import JSONResponse


def ok_response(**payload: Any) -> JSONResponse:
    return JSONResponse({"ok": True, **payload})


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"ok": False, "error": message})
