import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError
from loguru import logger

from apigw_log_retention.config import settings
from apigw_log_retention.exceptions import RemoteError
from apigw_log_retention.models import TransportConfig

APIGATEWAY_API_VERSION = "2015-07-09"


class AwsClients:
    """The API Gateway and CloudWatch Logs clients shared by one run."""

    def __init__(self, apigateway, logs):
        self.apigateway = apigateway
        self.logs = logs


def build_sdk_config(transport: TransportConfig) -> Config:
    proxies = None
    if transport.proxy_url:
        proxies = {"http": transport.proxy_url, "https": transport.proxy_url}
    return Config(proxies=proxies, user_agent_extra=settings.user_agent_extra)


def create_clients(transport: TransportConfig, region: str) -> AwsClients:
    """Create every AWS client of a run from a single session.

    Args:
        transport: Proxy and credential profile to apply to all clients
        region: AWS region the service was deployed to

    Returns:
        AwsClients: The API Gateway and CloudWatch Logs clients

    Raises:
        RemoteError: If the session or a client cannot be created, e.g. an unknown profile
    """
    sdk_config = build_sdk_config(transport)
    logger.debug(f"Creating AWS clients for region {region}")

    try:
        if transport.credential_profile:
            session = boto3.Session(
                profile_name=transport.credential_profile, region_name=region
            )
        else:
            session = boto3.Session(region_name=region)

        return AwsClients(
            apigateway=session.client(
                "apigateway", api_version=APIGATEWAY_API_VERSION, config=sdk_config
            ),
            logs=session.client("logs", config=sdk_config),
        )
    except BotoCoreError as e:
        raise RemoteError.from_boto(e, "Failed to create AWS clients") from e
