"""Common fixtures for tests."""

import unittest.mock as mock

import pytest
from loguru import logger

from apigw_log_retention.clients import AwsClients
from apigw_log_retention.models import DeploymentContext, NamingConvention


@pytest.fixture(autouse=True)
def clear_proxy_environment(monkeypatch):
    """Keep proxy variables of the machine running the tests out of the way."""
    for name in ("proxy", "HTTP_PROXY", "http_proxy", "HTTPS_PROXY", "https_proxy"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def apigateway_client():
    return mock.MagicMock()


@pytest.fixture
def logs_client():
    return mock.MagicMock()


@pytest.fixture
def clients(apigateway_client, logs_client):
    return AwsClients(apigateway=apigateway_client, logs=logs_client)


@pytest.fixture
def context():
    return DeploymentContext(
        service_name="orders",
        stage="prod",
        region="eu-west-1",
        naming_convention=NamingConvention.SERVICE_FIRST,
    )


@pytest.fixture
def rest_api_pages():
    """Return a factory for a fake paginated get_rest_apis call.

    The position returned to the caller is the offset of the next page, as a string.
    """

    def factory(apis):
        def get_rest_apis(limit, position=None):
            start = int(position) if position else 0
            response = {"items": apis[start : start + limit]}
            if start + limit < len(apis):
                response["position"] = str(start + limit)
            return response

        return get_rest_apis

    return factory


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during a test."""
    messages = []
    handler_id = logger.add(messages.append, format="{level} {message}")
    yield messages
    logger.remove(handler_id)
