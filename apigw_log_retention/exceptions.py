from __future__ import annotations

from typing import TYPE_CHECKING

from botocore.exceptions import ClientError

if TYPE_CHECKING:
    from apigw_log_retention.models import RunReport


class LogRetentionError(Exception):
    """Base class for every failure raised while applying log retention."""


class RestApiNotFoundError(LogRetentionError, LookupError):
    """No REST API with the expected name exists in the account/region."""

    def __init__(self, api_name: str, message: str | None = None):
        self.api_name = api_name
        super().__init__(message or f"Api {api_name} does not exist.")


class NotConfiguredError(LogRetentionError):
    """The stage has no access log destination configured."""


class RemoteError(LogRetentionError):
    """An AWS API call was rejected."""

    def __init__(self, message: str, error_code: str | None = None):
        self.error_code = error_code
        super().__init__(message)

    @classmethod
    def from_boto(cls, exc: Exception, action: str) -> RemoteError:
        """Wrap a botocore error raised while performing `action`."""
        error_code = None
        if isinstance(exc, ClientError):
            error_code = exc.response.get("Error", {}).get("Code")
        return cls(f"{action}: {exc}", error_code=error_code)


class RetentionRunError(LogRetentionError):
    """At least one log retention branch failed.

    The report holds the outcome of every branch that was attempted, so a
    successful branch stays observable next to the failed one.
    """

    def __init__(self, report: RunReport):
        self.report = report
        failed = ", ".join(outcome.kind.value for outcome in report.failures)
        super().__init__(f"Failed to set ApiGateway log retention for: {failed}")
