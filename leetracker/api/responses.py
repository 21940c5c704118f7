"""Response envelope shared by every endpoint.

All responses are `{"success": bool, "data": ... | null, "message": str}`.
"""

from typing import Any
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def api_response(data: Any = None, message: str = "", status_code: int = 200) -> JSONResponse:
    """Successful response with camelCase keys."""
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({"success": True, "data": data, "message": message}, by_alias=True),
    )


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "data": None, "message": message},
    )
