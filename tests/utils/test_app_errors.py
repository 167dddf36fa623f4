"""Tests for AppError and its factories."""

import pytest

from passroom.utils.app_errors import (
    AppError,
    AppErrorCode,
    HttpStatusCode,
    internal_error,
    invalid_access_error,
)


def _raise_here():
    raise AppError(errcode=AppErrorCode.E_INVALID_REQUEST, errmesg="bad input")


class TestAppError:
    def test_fields(self):
        error = AppError(
            errcode=AppErrorCode.E_UNAUTHORIZED,
            errmesg="nope",
            status_code=HttpStatusCode.FORBIDDEN,
        )

        assert error.errcode == "E_UNAUTHORIZED"
        assert error.errmesg == "nope"
        assert error.status_code == 403
        assert len(error.erresid) == 10
        assert str(error) == "nope"

    def test_default_status_is_bad_request(self):
        assert AppError(errcode="E_X", errmesg="x").status_code == 400

    def test_caller_info_points_at_raise_site(self):
        with pytest.raises(AppError) as exc_info:
            _raise_here()

        assert exc_info.value.caller_info.startswith(f"{__name__}:_raise_here:")

    def test_caller_info_skips_factories(self):
        error = invalid_access_error()

        assert "test_caller_info_skips_factories" in error.caller_info


class TestFactories:
    def test_invalid_access(self):
        error = invalid_access_error()

        assert error.errcode == AppErrorCode.E_INVALID_ACCESS
        assert error.status_code == 404
        assert error.errmesg == "Invalid URL"

    @pytest.mark.parametrize(
        "errcode",
        [
            AppErrorCode.E_UPSTREAM_FAILURE,
            AppErrorCode.E_ACQUIRE_FAILED,
            AppErrorCode.E_START_FAILED,
        ],
    )
    def test_upstream_failures_are_bad_gateway(self, errcode):
        error = internal_error(errcode)

        assert error.status_code == 502
        assert error.errmesg == "Internal Server Error"

    @pytest.mark.parametrize(
        "errcode",
        [AppErrorCode.E_INTERNAL_ERROR, AppErrorCode.E_CREDENTIAL_GENERATION_FAILED],
    )
    def test_server_faults_are_internal(self, errcode):
        error = internal_error(errcode)

        assert error.status_code == 500
        assert error.errcode == errcode.value
