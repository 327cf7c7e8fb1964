from typing import Iterator

from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger

from apigw_log_retention.exceptions import RemoteError, RestApiNotFoundError
from apigw_log_retention.models import RestApiSummary

DEFAULT_PAGE_SIZE = 500


class ResourceLocator:
    """Finds the REST API provisioned by a deployment."""

    def __init__(self, apigateway_client, page_size: int = DEFAULT_PAGE_SIZE):
        """Initialize the ResourceLocator.

        Args:
            apigateway_client: boto3 API Gateway client
            page_size: Number of REST APIs requested per page
        """
        self.client = apigateway_client
        self.page_size = page_size

    def iter_rest_apis(self) -> Iterator[RestApiSummary]:
        """Yield every REST API in the region, one page at a time.

        Each request carries the position returned by the previous page, so
        pages are fetched strictly in sequence until no position comes back.
        """
        position = None
        while True:
            params = {"limit": self.page_size}
            if position:
                params["position"] = position

            try:
                response = self.client.get_rest_apis(**params)
            except (BotoCoreError, ClientError) as e:
                raise RemoteError.from_boto(e, "Failed to list rest apis") from e

            for item in response.get("items") or []:
                yield RestApiSummary(id=item["id"], name=item["name"])

            position = response.get("position")
            if not position:
                return

    def locate(self, expected_name: str) -> str:
        """Return the id of the REST API named `expected_name`.

        The first match in listing order wins; further matches are logged and ignored.

        Raises:
            RestApiNotFoundError: If no REST API has that exact name
        """
        apis = list(self.iter_rest_apis())
        matches = [api for api in apis if api.name == expected_name]
        logger.debug(f"Scanned {len(apis)} rest apis for {expected_name}")

        if not matches:
            raise RestApiNotFoundError(expected_name)

        if len(matches) > 1:
            ignored = ", ".join(api.id for api in matches[1:])
            logger.warning(
                f"Found {len(matches)} rest apis named {expected_name}, "
                f"using {matches[0].id} and ignoring {ignored}"
            )

        return matches[0].id
