"""Tests for the shared API envelope helpers."""

import orjson

from passroom.shared.api.utils import ApiFailure, ApiSuccess, api_failure, make_response


class TestMakeResponse:
    def test_success_defaults_to_200(self):
        response = make_response(ApiSuccess(results={"a": 1}))

        assert response.status_code == 200
        assert orjson.loads(response.body)["results"] == {"a": 1}

    def test_internal_failure_defaults_to_500(self):
        response = make_response(ApiFailure())

        assert response.status_code == 500

    def test_other_failure_defaults_to_400(self):
        response = make_response(ApiFailure(errcode="E_INVALID_REQUEST"))

        assert response.status_code == 400

    def test_explicit_status(self):
        response = make_response(ApiFailure(errcode="E_INVALID_ACCESS"), status_code=404)

        assert response.status_code == 404


class TestApiFailure:
    def test_exception_message_is_formatted(self):
        failure = api_failure("E_X", ValueError("boom"))

        assert failure.errcode == "E_X"
        assert "ValueError: boom" in failure.errmesg

    def test_defaults(self):
        failure = api_failure()

        assert failure.errcode == "E_INTERNAL_ERROR"
        assert failure.errmesg
        assert len(failure.erresid) == 10
