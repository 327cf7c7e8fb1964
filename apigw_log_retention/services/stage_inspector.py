from botocore.exceptions import BotoCoreError, ClientError

from apigw_log_retention.exceptions import NotConfiguredError, RemoteError
from apigw_log_retention.models import StageConfig

LOG_GROUP_DELIMITER = "log-group:"

NOT_CONFIGURED_MESSAGE = (
    "Access log destination ARN not set! Please check access logging is enabled and "
    "destination ARN is configured in ApiGateway > stage > Logs/Tracing."
)


class StageInspector:
    """Reads the access log destination of an API Gateway stage."""

    def __init__(self, apigateway_client):
        self.client = apigateway_client

    def get_stage_config(self, rest_api_id: str, stage_name: str) -> StageConfig:
        try:
            stage = self.client.get_stage(restApiId=rest_api_id, stageName=stage_name)
        except (BotoCoreError, ClientError) as e:
            raise RemoteError.from_boto(
                e, f"Failed to get stage {stage_name} of rest api {rest_api_id}"
            ) from e

        access_log_settings = stage.get("accessLogSettings") or {}
        return StageConfig(destination_arn=access_log_settings.get("destinationArn") or None)

    def inspect(self, rest_api_id: str, stage_name: str) -> str:
        """Return the name of the log group the stage writes access logs to.

        Raises:
            NotConfiguredError: If the stage has no CloudWatch Logs access log destination
        """
        stage_config = self.get_stage_config(rest_api_id, stage_name)
        if not stage_config.destination_arn:
            raise NotConfiguredError(NOT_CONFIGURED_MESSAGE)

        parts = stage_config.destination_arn.split(LOG_GROUP_DELIMITER)
        if len(parts) < 2 or not parts[1]:
            raise NotConfiguredError(
                f"Access log destination {stage_config.destination_arn} is not a "
                f"CloudWatch Logs log group. {NOT_CONFIGURED_MESSAGE}"
            )
        return parts[1]
