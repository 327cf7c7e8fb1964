from typing import Callable

from botocore.exceptions import BotoCoreError
from loguru import logger

from apigw_log_retention.clients import AwsClients, create_clients
from apigw_log_retention.exceptions import (
    LogRetentionError,
    RemoteError,
    RestApiNotFoundError,
    RetentionRunError,
)
from apigw_log_retention.models import (
    BranchOutcome,
    DeploymentContext,
    LogGroupTarget,
    LogKind,
    LogRetentionConfig,
    RunReport,
    TransportConfig,
)
from apigw_log_retention.services.locator import DEFAULT_PAGE_SIZE, ResourceLocator
from apigw_log_retention.services.retention import RetentionUpdater
from apigw_log_retention.services.stage_inspector import StageInspector

LOG_PREFIX = "apigw-log-retention -"


def execution_log_group_name(rest_api_id: str, stage: str) -> str:
    """Name of the log group API Gateway creates for a stage's execution logs."""
    return f"API-Gateway-Execution-Logs_{rest_api_id}/{stage}"


class LogRetentionOrchestrator:
    """Applies the configured retention to a deployed REST API's log groups."""

    def __init__(
        self,
        clients_factory: Callable[[TransportConfig, str], AwsClients] = create_clients,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self.clients_factory = clients_factory
        self.page_size = page_size

    def run(
        self,
        context: DeploymentContext,
        config: LogRetentionConfig,
        transport: TransportConfig | None = None,
    ) -> RunReport:
        """Set access and execution log retention for the deployed REST API.

        Nothing is called on AWS when both log kinds are disabled. Otherwise
        the REST API is located once, then the access and execution branches
        run one after the other; a failing branch does not stop the other one.

        Args:
            context: The deployment that just completed
            config: Retention wanted for access and execution logs
            transport: Proxy and credential profile for the AWS clients

        Returns:
            RunReport: The outcome of each enabled branch

        Raises:
            RestApiNotFoundError: If the REST API could not be found
            RemoteError: If the AWS clients could not be created or listing REST APIs failed
            RetentionRunError: If at least one branch failed, after both ran
        """
        if not config.any_enabled:
            logger.info(f"{LOG_PREFIX} Access and execution log retention disabled, skipping.")
            return RunReport(skipped=True)

        if transport is None:
            transport = TransportConfig()
        clients = self._create_clients(transport, context.region)
        updater = RetentionUpdater(clients.logs)

        rest_api_id = self._locate_rest_api(clients, context)
        report = RunReport(rest_api_id=rest_api_id)

        if config.access_logging.enabled:
            inspector = StageInspector(clients.apigateway)
            report.outcomes.append(
                self._run_branch(
                    LogKind.ACCESS,
                    lambda: LogGroupTarget(
                        kind=LogKind.ACCESS,
                        name=inspector.inspect(rest_api_id, context.stage),
                        spec=config.access_logging,
                    ),
                    updater,
                )
            )

        if config.execution_logging.enabled:
            report.outcomes.append(
                self._run_branch(
                    LogKind.EXECUTION,
                    lambda: LogGroupTarget(
                        kind=LogKind.EXECUTION,
                        name=execution_log_group_name(rest_api_id, context.stage),
                        spec=config.execution_logging,
                    ),
                    updater,
                )
            )

        if not report.succeeded:
            raise RetentionRunError(report)
        return report

    def _create_clients(self, transport: TransportConfig, region: str) -> AwsClients:
        try:
            return self.clients_factory(transport, region)
        except (BotoCoreError, RemoteError) as e:
            error_message = f"{LOG_PREFIX} ERROR: Failed to create AWS clients. {e}"
            logger.error(error_message)
            raise RemoteError(error_message, error_code=getattr(e, "error_code", None)) from e

    def _locate_rest_api(self, clients: AwsClients, context: DeploymentContext) -> str:
        locator = ResourceLocator(clients.apigateway, page_size=self.page_size)
        try:
            return locator.locate(context.api_name)
        except RestApiNotFoundError as e:
            error_message = f"{LOG_PREFIX} ERROR: Failed to retrieve rest api id. {e}"
            logger.error(error_message)
            raise RestApiNotFoundError(e.api_name, message=error_message) from e
        except RemoteError as e:
            error_message = f"{LOG_PREFIX} ERROR: Failed to retrieve rest api id. {e}"
            logger.error(error_message)
            raise RemoteError(error_message, error_code=e.error_code) from e

    def _run_branch(
        self,
        kind: LogKind,
        resolve_target: Callable[[], LogGroupTarget],
        updater: RetentionUpdater,
    ) -> BranchOutcome:
        log_group_name = None
        try:
            target = resolve_target()
            log_group_name = target.name
            updater.set_retention(target.name, target.spec)
        except LogRetentionError as e:
            error_message = (
                f"{LOG_PREFIX} ERROR: Failed to set ApiGateway {kind.value} log retention. {e}"
            )
            logger.error(error_message)
            return BranchOutcome(
                kind=kind, log_group_name=log_group_name, succeeded=False, error=error_message
            )

        logger.info(
            f"{LOG_PREFIX} Successfully set ApiGateway {kind.value} log ({target.name}) "
            f"retention to {target.spec.days} days."
        )
        return BranchOutcome(kind=kind, log_group_name=target.name, succeeded=True)
