"""Tests for RequestConfig and ProviderParameter."""

import pytest
from pydantic import ValidationError
from request_store.core.provider import HTTP_METHODS, ProviderParameter, RequestConfig


class TestRequestConfig:
    def test_defaults(self):
        config = RequestConfig(url="/users")

        assert config.method == "GET"
        assert config.extra_data is None

    @pytest.mark.parametrize("method", HTTP_METHODS)
    def test_supported_methods(self, method):
        assert RequestConfig(url="/users", method=method).method == method

    @pytest.mark.parametrize("raw, expected", [("post", "POST"), (" Patch ", "PATCH"), ("head", "HEAD")])
    def test_method_is_normalized(self, raw, expected):
        assert RequestConfig(url="/users", method=raw).method == expected

    @pytest.mark.parametrize("method", ["OPTIONS", "CONNECT", "", 42])
    def test_unsupported_methods_rejected(self, method):
        with pytest.raises(ValidationError):
            RequestConfig(url="/users", method=method)

    def test_is_frozen(self):
        config = RequestConfig(url="/users")

        with pytest.raises(ValidationError):
            config.url = "/other"

    def test_extra_data_is_kept_as_is(self):
        marker = object()

        assert RequestConfig(url="/users", extra_data=marker).extra_data is marker


class TestProviderParameter:
    def test_from_config_duplicates_params(self):
        config = RequestConfig(url="/users", method="PUT", extra_data={"retry": False})
        params = {"name": "foo"}

        parameter = ProviderParameter.from_config(config, params)

        assert parameter.url == "/users"
        assert parameter.method == "PUT"
        assert parameter.body is params
        assert parameter.query is params
        assert parameter.extra_data == {"retry": False}

    def test_from_config_without_params(self):
        parameter = ProviderParameter.from_config(RequestConfig(url="/users"))

        assert parameter.body is None
        assert parameter.query is None

    @pytest.mark.parametrize("raw, expected", [("delete", "DELETE"), (" get", "GET")])
    def test_method_is_normalized(self, raw, expected):
        assert ProviderParameter(url="/users", method=raw).method == expected

    def test_unsupported_method_rejected(self):
        with pytest.raises(ValidationError):
            ProviderParameter(url="/users", method="TRACE")
