"""Application error type raised by domain code and rendered by the API layer."""

import inspect
from enum import Enum, IntEnum
from uuid import uuid4


class HttpStatusCode(IntEnum):
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    CONFLICT = 409
    INTERNAL_SERVER_ERROR = 500
    BAD_GATEWAY = 502


class AppErrorCode(str, Enum):
    """Coarse error kinds surfaced to callers."""

    E_INVALID_REQUEST = "E_INVALID_REQUEST"
    E_BAD_TOKEN = "E_BAD_TOKEN"
    E_UNAUTHORIZED = "E_UNAUTHORIZED"
    E_INVALID_ACCESS = "E_INVALID_ACCESS"
    E_RECORDING_NOT_ACTIVE = "E_RECORDING_NOT_ACTIVE"
    E_CREDENTIAL_GENERATION_FAILED = "E_CREDENTIAL_GENERATION_FAILED"
    E_ACQUIRE_FAILED = "E_ACQUIRE_FAILED"
    E_START_FAILED = "E_START_FAILED"
    E_UPSTREAM_FAILURE = "E_UPSTREAM_FAILURE"
    E_INTERNAL_ERROR = "E_INTERNAL_ERROR"

    def __str__(self) -> str:
        return self.value


# Messages shown to callers; upstream error text never goes here.
ERRMESG_INVALID_ACCESS = "Invalid URL"
ERRMESG_INTERNAL = "Internal Server Error"
ERRMESG_UNAUTHORIZED_RECORDING = "Unauthorised to record channel"
ERRMESG_RECORDING_NOT_STARTED = "Recording not started"
ERRMESG_INVALID_TOKEN = "Invalid Token"


class AppError(Exception):
    """Error carrying an error code, a caller-safe message and an HTTP status.

    The location of the ``raise`` site is captured so that the handler can log
    where the error originated.
    """

    def __init__(
        self,
        errcode: AppErrorCode | str,
        errmesg: str,
        status_code: int = HttpStatusCode.BAD_REQUEST,
    ):
        super().__init__(errmesg)
        self.errcode = str(errcode)
        self.errmesg = errmesg
        self.status_code = int(status_code)
        self.erresid = uuid4().hex[:10]
        self.caller_info = self._capture_caller()

    @staticmethod
    def _capture_caller() -> str:
        caller = inspect.currentframe()
        # first frame outside this module (skips __init__ and the factory helpers)
        while caller is not None and caller.f_globals.get("__name__") == __name__:
            caller = caller.f_back
        if caller is None:
            return "unknown"
        module_name = caller.f_globals.get("__name__") or caller.f_code.co_filename
        return f"{module_name}:{caller.f_code.co_name}:{caller.f_lineno}"

    def __repr__(self) -> str:
        return (
            f"AppError(errcode={self.errcode!r}, errmesg={self.errmesg!r}, "
            f"status_code={self.status_code})"
        )


def invalid_access_error() -> AppError:
    return AppError(
        errcode=AppErrorCode.E_INVALID_ACCESS,
        errmesg=ERRMESG_INVALID_ACCESS,
        status_code=HttpStatusCode.NOT_FOUND,
    )


def internal_error(errcode: AppErrorCode = AppErrorCode.E_INTERNAL_ERROR) -> AppError:
    """Internal failure with a generic message; details belong in the logs."""
    status_code = (
        HttpStatusCode.BAD_GATEWAY
        if errcode
        in (
            AppErrorCode.E_UPSTREAM_FAILURE,
            AppErrorCode.E_ACQUIRE_FAILED,
            AppErrorCode.E_START_FAILED,
        )
        else HttpStatusCode.INTERNAL_SERVER_ERROR
    )
    return AppError(errcode=errcode, errmesg=ERRMESG_INTERNAL, status_code=status_code)
