from enum import Enum

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

NEVER_EXPIRE = "never expire"


class NamingConvention(str, Enum):
    """How the deployment tool names the REST API it provisions."""

    SERVICE_FIRST = "service-first"
    STAGE_FIRST = "stage-first"


class LogKind(str, Enum):
    ACCESS = "access"
    EXECUTION = "execution"


class DeploymentContext(BaseModel):
    """The deployment that just completed."""

    model_config = ConfigDict(frozen=True)

    service_name: str = Field(description="Name of the deployed service.")
    stage: str = Field(description="Deployment stage, also the API Gateway stage name.")
    region: str = Field(description="AWS region the service was deployed to.")
    naming_convention: NamingConvention = Field(
        default=NamingConvention.STAGE_FIRST,
        description="Whether the REST API name starts with the service or the stage.",
    )

    @property
    def api_name(self) -> str:
        if self.naming_convention is NamingConvention.SERVICE_FIRST:
            return f"{self.service_name}-{self.stage}"
        return f"{self.stage}-{self.service_name}"


class RetentionSpec(BaseModel):
    """Retention wanted for one kind of API Gateway log.

    `days` is either a number of days or "never expire" (any casing), and is
    only looked at when `enabled` is set.
    """

    enabled: bool = Field(default=False, description="Manage retention for this log kind.")
    days: int | str | None = Field(
        default=None, description='Retention in days, or "never expire".'
    )

    @field_validator("days", mode="before")
    @classmethod
    def reject_boolean_days(cls, value, info: ValidationInfo):
        # Lax int parsing would otherwise turn true into a 1 day retention.
        if isinstance(value, bool) and info.data.get("enabled"):
            raise ValueError(f'days must be a number of days or "never expire", got {value!r}')
        return value

    @model_validator(mode="after")
    def check_days(self) -> "RetentionSpec":
        if not self.enabled:
            return self

        if isinstance(self.days, str):
            if self.days.lower() == NEVER_EXPIRE:
                return self
            if not self.days.strip().isdigit():
                raise ValueError(
                    f'days must be a number of days or "never expire", got {self.days!r}'
                )
            self.days = int(self.days)

        if self.days is None or self.days <= 0:
            raise ValueError(
                f'days must be a positive number of days or "never expire", got {self.days!r}'
            )
        return self

    @property
    def never_expire(self) -> bool:
        return isinstance(self.days, str) and self.days.lower() == NEVER_EXPIRE


class LogRetentionConfig(BaseModel):
    """Retention settings for both log kinds, disabled unless configured."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    access_logging: RetentionSpec = Field(
        default_factory=RetentionSpec, alias="accessLogging"
    )
    execution_logging: RetentionSpec = Field(
        default_factory=RetentionSpec, alias="executionLogging"
    )

    @property
    def any_enabled(self) -> bool:
        return self.access_logging.enabled or self.execution_logging.enabled


class ApiGatewayProviderConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    should_start_name_with_service: bool = Field(
        default=False, alias="shouldStartNameWithService"
    )


class ProviderConfig(BaseModel):
    """Deployment provider settings: where and as whom the service was deployed."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    stage: str | None = None
    region: str | None = None
    profile: str | None = Field(default=None, description="Named AWS credential profile.")
    api_gateway: ApiGatewayProviderConfig = Field(
        default_factory=ApiGatewayProviderConfig, alias="apiGateway"
    )


class CustomConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    apigateway_log_retention: LogRetentionConfig = Field(
        default_factory=LogRetentionConfig, alias="apigatewayLogRetention"
    )


class HookConfig(BaseModel):
    """The deployment configuration file the hook reads, with defaults at every level."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    service: str | None = None
    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    custom: CustomConfig = Field(default_factory=CustomConfig)

    @property
    def log_retention(self) -> LogRetentionConfig:
        return self.custom.apigateway_log_retention

    @property
    def naming_convention(self) -> NamingConvention:
        if self.provider.api_gateway.should_start_name_with_service:
            return NamingConvention.SERVICE_FIRST
        return NamingConvention.STAGE_FIRST


class TransportConfig(BaseModel):
    """Proxy and credential settings shared by every AWS client of a run."""

    model_config = ConfigDict(frozen=True)

    proxy_url: str | None = None
    credential_profile: str | None = None


class RestApiSummary(BaseModel):
    id: str
    name: str


class StageConfig(BaseModel):
    destination_arn: str | None = None


class LogGroupTarget(BaseModel):
    kind: LogKind
    name: str
    spec: RetentionSpec


class BranchOutcome(BaseModel):
    """Result of managing retention for one log kind."""

    kind: LogKind
    log_group_name: str | None = None
    succeeded: bool
    error: str | None = None


class RunReport(BaseModel):
    skipped: bool = False
    rest_api_id: str | None = None
    outcomes: list[BranchOutcome] = Field(default_factory=list)

    @property
    def failures(self) -> list[BranchOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.succeeded]

    @property
    def succeeded(self) -> bool:
        return not self.failures
