from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger

from apigw_log_retention.exceptions import RemoteError
from apigw_log_retention.models import RetentionSpec


class RetentionUpdater:
    """Sets or clears the retention policy of a CloudWatch Logs log group."""

    def __init__(self, logs_client):
        self.client = logs_client

    def set_retention(self, log_group_name: str, spec: RetentionSpec) -> None:
        """Apply `spec` to the log group with exactly one CloudWatch Logs call.

        "never expire" deletes the retention policy, which succeeds whether or
        not one existed; anything else puts a policy with the given day count.

        Raises:
            RemoteError: If CloudWatch Logs rejects the call
        """
        try:
            if spec.never_expire:
                logger.debug(f"Deleting retention policy of {log_group_name}")
                self.client.delete_retention_policy(logGroupName=log_group_name)
            else:
                logger.debug(f"Putting {spec.days} day retention policy on {log_group_name}")
                self.client.put_retention_policy(
                    logGroupName=log_group_name, retentionInDays=int(spec.days)
                )
        except (BotoCoreError, ClientError) as e:
            raise RemoteError.from_boto(
                e, f"Failed to update retention policy of {log_group_name}"
            ) from e
