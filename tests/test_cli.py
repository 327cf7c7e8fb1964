"""Tests for the CLI interface."""

import json
from unittest.mock import patch

import pytest
from botocore.exceptions import ProfileNotFound
from typer.testing import CliRunner

from apigw_log_retention.exceptions import NotConfiguredError
from apigw_log_retention.main import app
from apigw_log_retention.models import NamingConvention


@pytest.fixture
def runner():
    """Create a CLI runner for testing."""
    return CliRunner()


@pytest.fixture(autouse=True)
def keep_test_logging():
    with patch("apigw_log_retention.main.configure_logging"):
        yield


@pytest.fixture
def mock_orchestrator():
    with patch("apigw_log_retention.main.LogRetentionOrchestrator") as mock_cls:
        yield mock_cls.return_value


@pytest.fixture
def hook_config_file(tmp_path):
    path = tmp_path / "serverless.json"
    path.write_text(
        json.dumps(
            {
                "service": "orders",
                "provider": {
                    "stage": "staging",
                    "region": "eu-west-1",
                    "profile": "deployer",
                    "apiGateway": {"shouldStartNameWithService": True},
                },
                "custom": {
                    "apigatewayLogRetention": {
                        "accessLogging": {"enabled": True, "days": 14},
                        "executionLogging": {"enabled": True, "days": "never expire"},
                    }
                },
            }
        )
    )
    return str(path)


def test_values_from_config_file(runner, mock_orchestrator, hook_config_file):
    result = runner.invoke(app, ["-c", hook_config_file])

    assert result.exit_code == 0
    mock_orchestrator.run.assert_called_once()
    context, config, transport = mock_orchestrator.run.call_args.args
    assert context.api_name == "orders-staging"
    assert context.region == "eu-west-1"
    assert config.access_logging.days == 14
    assert config.execution_logging.never_expire is True
    assert transport.credential_profile == "deployer"


def test_options_override_config_file(runner, mock_orchestrator, hook_config_file):
    result = runner.invoke(
        app,
        [
            "-c",
            hook_config_file,
            "-s",
            "billing",
            "--stage",
            "prod",
            "-r",
            "us-west-2",
            "-p",
            "admin",
            "--stage-first",
        ],
    )

    assert result.exit_code == 0
    context, _, transport = mock_orchestrator.run.call_args.args
    assert context.naming_convention is NamingConvention.STAGE_FIRST
    assert context.api_name == "prod-billing"
    assert context.region == "us-west-2"
    assert transport.credential_profile == "admin"


def test_defaults_without_config_file(runner, mock_orchestrator, monkeypatch):
    monkeypatch.setenv("HTTP_PROXY", "http://proxy:3128")

    result = runner.invoke(app, ["-s", "orders"])

    assert result.exit_code == 0
    context, config, transport = mock_orchestrator.run.call_args.args
    assert context.api_name == "dev-orders"
    assert context.region == "us-east-1"
    assert config.any_enabled is False
    assert transport.proxy_url == "http://proxy:3128"


def test_missing_service_name(runner, mock_orchestrator):
    result = runner.invoke(app, [])

    assert result.exit_code == 1
    assert "service name is required" in result.stdout
    mock_orchestrator.run.assert_not_called()


def test_missing_config_file(runner, mock_orchestrator, tmp_path):
    result = runner.invoke(app, ["-c", str(tmp_path / "missing.json")])

    assert result.exit_code == 1
    assert "Config file not found" in result.stdout


def test_invalid_config_file(runner, mock_orchestrator, tmp_path):
    path = tmp_path / "broken.json"
    path.write_text('{ "service": }')

    result = runner.invoke(app, ["-c", str(path)])

    assert result.exit_code == 1
    assert "Failed to parse" in result.stdout


def test_invalid_retention_days(runner, mock_orchestrator, tmp_path):
    path = tmp_path / "serverless.json"
    path.write_text(
        json.dumps(
            {
                "service": "orders",
                "custom": {
                    "apigatewayLogRetention": {"accessLogging": {"enabled": True, "days": "soon"}}
                },
            }
        )
    )

    result = runner.invoke(app, ["-c", str(path)])

    assert result.exit_code == 1
    assert "Invalid log retention configuration" in result.stdout
    mock_orchestrator.run.assert_not_called()


def test_run_failure_exits_non_zero(runner, mock_orchestrator):
    mock_orchestrator.run.side_effect = NotConfiguredError("Access log destination ARN not set!")

    result = runner.invoke(app, ["-s", "orders"])

    assert result.exit_code == 1
    assert "Access log destination ARN not set!" in result.stdout


@patch("apigw_log_retention.clients.boto3.Session")
def test_unknown_profile_exits_non_zero(mock_session, runner, hook_config_file):
    mock_session.side_effect = ProfileNotFound(profile="nosuchprofile")

    result = runner.invoke(app, ["-c", hook_config_file, "-p", "nosuchprofile"])

    assert result.exit_code == 1
    assert "Error:" in result.stdout
    assert "Failed to create AWS clients" in result.stdout
    mock_session.assert_called_once_with(profile_name="nosuchprofile", region_name="eu-west-1")
