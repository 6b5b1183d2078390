from fastapi import status
from fastapi.responses import JSONResponse

from kinkatsu.errors import ErrorCode
from kinkatsu.schemas.result import ActionResult

ERROR_STATUS = {
    ErrorCode.AUTHENTICATION_REQUIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.VALIDATION_FAILED: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.DUPLICATE_NAME: status.HTTP_409_CONFLICT,
    ErrorCode.STORE_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.UNKNOWN: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

def action_response(result: ActionResult, *, success_status: int = status.HTTP_200_OK) -> JSONResponse:
    code = success_status if result.ok else ERROR_STATUS[result.code]
    headers = {"WWW-Authenticate": "Bearer"} if result.code == ErrorCode.AUTHENTICATION_REQUIRED else None
    return JSONResponse(
        status_code=code,
        content=result.model_dump(mode="json", exclude_none=True),
        headers=headers,
    )
