"""Command-line hook that applies API Gateway log retention after a deployment."""

import json
import sys
from typing import Annotated, Optional

import typer
from loguru import logger
from pydantic import ValidationError

from apigw_log_retention.config import load_hook_config, resolve_transport_config, settings
from apigw_log_retention.exceptions import LogRetentionError
from apigw_log_retention.models import DeploymentContext, NamingConvention
from apigw_log_retention.orchestrator import LogRetentionOrchestrator

app = typer.Typer(
    help="Apply CloudWatch log retention to API Gateway access and execution logs."
)


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


@app.command()
def set_retention(
    config_path: Annotated[
        Optional[str],
        typer.Option("--config", "-c", help="Path to the JSON deployment configuration"),
    ] = None,
    service: Annotated[
        Optional[str], typer.Option("--service", "-s", help="Name of the deployed service")
    ] = None,
    stage: Annotated[
        Optional[str], typer.Option("--stage", help="Deployment stage")
    ] = None,
    region: Annotated[
        Optional[str], typer.Option("--region", "-r", help="AWS region of the deployment")
    ] = None,
    profile: Annotated[
        Optional[str], typer.Option("--profile", "-p", help="AWS credential profile")
    ] = None,
    service_first: Annotated[
        Optional[bool],
        typer.Option(
            "--service-first/--stage-first",
            help="Whether the REST API name starts with the service or the stage",
        ),
    ] = None,
):
    """Set retention on the access and execution logs of the deployed REST API.

    Command-line options take precedence over the configuration file, which
    takes precedence over the settings defaults.
    """
    configure_logging(settings.logging_level)

    try:
        hook_config = load_hook_config(config_path)
    except FileNotFoundError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(code=1)
    except json.JSONDecodeError:
        typer.echo(f"Error: Failed to parse {config_path} as JSON")
        raise typer.Exit(code=1)
    except ValidationError as e:
        typer.echo(f"Error: Invalid log retention configuration: {e}")
        raise typer.Exit(code=1)

    service_name = service or hook_config.service
    if not service_name:
        typer.echo("Error: a service name is required (--service or 'service' in the config)")
        raise typer.Exit(code=1)

    if service_first is None:
        naming_convention = hook_config.naming_convention
    elif service_first:
        naming_convention = NamingConvention.SERVICE_FIRST
    else:
        naming_convention = NamingConvention.STAGE_FIRST

    context = DeploymentContext(
        service_name=service_name,
        stage=stage or hook_config.provider.stage or settings.default_stage,
        region=region or hook_config.provider.region or settings.default_region,
        naming_convention=naming_convention,
    )
    transport = resolve_transport_config(profile=profile or hook_config.provider.profile)

    orchestrator = LogRetentionOrchestrator(page_size=settings.page_size)
    try:
        orchestrator.run(context, hook_config.log_retention, transport)
    except LogRetentionError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
