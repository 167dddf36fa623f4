from fastapi import Request
from fastapi.responses import ORJSONResponse
from loguru import logger

from passroom.shared.api.utils import ApiFailure, make_response
from passroom.utils.app_errors import AppError

# Statuses at or above this are logged at error level.
_SERVER_SIDE_STATUS = 500


async def app_error_handler(request: Request, exc: AppError) -> ORJSONResponse:
    """
    Custom exception handler for AppError.
    Converts AppError to ApiFailure and returns via make_response.
    """
    # Log with the caller info captured when AppError was raised
    log_msg = (
        f"{exc.errcode} {exc.erresid} path={request.url.path} "
        f"msg={exc.errmesg} caller={exc.caller_info}"
    )
    if exc.status_code >= _SERVER_SIDE_STATUS:
        logger.error(log_msg)
    else:
        logger.warning(log_msg)

    failure = ApiFailure(errcode=exc.errcode, errmesg=exc.errmesg, erresid=exc.erresid)
    return make_response(failure, status_code=exc.status_code)
