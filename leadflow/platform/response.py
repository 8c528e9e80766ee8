from typing import Any

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def api_response(*, status_code: int = status.HTTP_200_OK, **fields: Any) -> JSONResponse:
    """
    Success envelope shared by every JSON endpoint.
    The landing pages read these keys directly, so the shape is flat: {"success": true, ...}.
    """
    content = {"success": True}
    content.update(jsonable_encoder(fields))
    return JSONResponse(status_code=status_code, content=content)


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})
