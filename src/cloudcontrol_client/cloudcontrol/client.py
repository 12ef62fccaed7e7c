"""CloudControl API client.

Provides an asynchronous HTTP client with Basic authentication, a cached
view of the user's account, and typed access to network domains.
"""

import threading
import time
from uuid import UUID

import httpx
import structlog

from ..cache import SingleValueCache
from ..metrics import ClientMetrics
from . import endpoints
from .exceptions import ClientDisposedError, CloudControlApiError
from .types import (
    ApiResponseCodeV2,
    ApiResponseV2,
    Credentials,
    NetworkDomain,
    NetworkDomains,
    Paging,
    UserAccount,
)

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT = 30.0


class CloudControlClient:
    """Client for the CloudControl API.

    Organization-scoped operations resolve the organization id from the
    user's account, which is fetched once and cached until ``reset()`` or
    ``get_account(refresh=True)``.

    Hold one client for the duration of a session. Close it with
    ``aclose()`` or use it as an async context manager; a closed client
    cannot be reused.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        account: UserAccount | None = None,
        metrics: ClientMetrics | None = None,
    ):
        """Initialize the client.

        Most callers should use ``create()`` or ``from_credentials()``.

        Args:
            http_client: HTTP client bound to the API base address, with
                authentication configured. Closing this client closes it.
            account: Optional account information to pre-populate the cache.
            metrics: Optional Prometheus metrics to record requests on.

        Raises:
            ValueError: If http_client is None.
        """
        if http_client is None:
            msg = "http_client cannot be None"
            raise ValueError(msg)

        self._http_client = http_client
        self._account = SingleValueCache[UserAccount]("account", account)
        self._metrics = metrics

        self._close_lock = threading.Lock()
        self._is_closed = False

    @classmethod
    def create(
        cls,
        base_url: str | httpx.URL,
        user_name: str,
        password: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
        metrics: ClientMetrics | None = None,
    ) -> "CloudControlClient":
        """Create a client authenticating with a user name and password.

        Args:
            base_url: Base URL of the CloudControl API, including the API
                version (e.g. "https://api-au.dimensiondata.com/caas/2.4/").
            user_name: The CloudControl user name.
            password: The CloudControl password.
            timeout: Request timeout in seconds (default: 30.0).
            transport: Optional httpx transport (e.g. for proxies or tests).
            metrics: Optional Prometheus metrics to record requests on.

        Raises:
            ValueError: If any argument is missing or empty.
        """
        _validate_base_url(base_url)
        if not user_name:
            msg = "user_name cannot be empty"
            raise ValueError(msg)
        if not password:
            msg = "password cannot be empty"
            raise ValueError(msg)

        return cls.from_credentials(
            base_url,
            Credentials(user_name=user_name, password=password),
            timeout=timeout,
            transport=transport,
            metrics=metrics,
        )

    @classmethod
    def from_credentials(
        cls,
        base_url: str | httpx.URL,
        credentials: Credentials,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
        metrics: ClientMetrics | None = None,
    ) -> "CloudControlClient":
        """Create a client authenticating with the given credentials.

        The Authorization header is sent with every request, starting with
        the first one, rather than waiting for an authentication challenge.

        Raises:
            ValueError: If base_url or credentials are missing.
        """
        _validate_base_url(base_url)
        if credentials is None:
            msg = "credentials cannot be None"
            raise ValueError(msg)
        if timeout <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)

        http_client = httpx.AsyncClient(
            base_url=base_url,
            auth=httpx.BasicAuth(credentials.user_name, credentials.password),
            headers={"Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )
        logger.debug(
            "Created CloudControl client",
            base_url=str(http_client.base_url),
            user_name=credentials.user_name,
        )
        return cls(http_client, metrics=metrics)

    async def __aenter__(self) -> "CloudControlClient":
        """Enter async context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context manager and close the client."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the client and its HTTP connections.

        Safe to call any number of times, concurrently; only the first call
        closes the underlying HTTP client.
        """
        with self._close_lock:
            already_closed = self._is_closed
            self._is_closed = True

        if already_closed:
            return

        logger.debug("Closing CloudControl client")
        await self._http_client.aclose()

    @property
    def is_closed(self) -> bool:
        """Has the client been closed?"""
        return self._is_closed

    def _check_disposed(self) -> None:
        if self._is_closed:
            raise ClientDisposedError(type(self).__name__)

    def reset(self) -> None:
        """Reset the client, clearing all cached data.

        Raises:
            ClientDisposedError: If the client has been closed.
        """
        self._check_disposed()

        self._account.clear()

    @property
    def base_url(self) -> httpx.URL:
        """The base URL of the CloudControl API.

        Raises:
            ClientDisposedError: If the client has been closed.
        """
        self._check_disposed()

        return self._http_client.base_url

    async def _send(
        self,
        operation: str,
        template: endpoints.RequestTemplate,
        **values,
    ) -> httpx.Response:
        """Send a GET request built from a template.

        The response is returned whatever its status; interpreting
        unsuccessful responses is up to the caller.

        Args:
            operation: Operation name, used for logging and metrics.
            template: Request template for the endpoint.
            **values: Template parameter values.

        Returns:
            The fully read HTTP response.

        Raises:
            httpx.HTTPError: If the request could not be sent.
        """
        endpoint, params = template.build(**values)
        start_time = time.monotonic()

        try:
            logger.debug(
                "Making API request",
                method="GET",
                operation=operation,
                endpoint=endpoint,
                params=params,
            )
            response = await self._http_client.get(endpoint, params=params)
        except httpx.HTTPError:
            duration = time.monotonic() - start_time
            logger.exception(
                "API request failed",
                operation=operation,
                duration_seconds=round(duration, 3),
            )
            if self._metrics is not None:
                self._metrics.observe(operation, "error", duration)
            raise

        duration = time.monotonic() - start_time
        logger.debug(
            "API request completed",
            operation=operation,
            status_code=response.status_code,
            duration_seconds=round(duration, 3),
        )
        if self._metrics is not None:
            self._metrics.observe(operation, response.status_code, duration)
        return response

    async def get_account(self, refresh: bool = False) -> UserAccount:
        """Retrieve the user's account information.

        Args:
            refresh: Don't use cached account information.

        Returns:
            The user account information.

        Raises:
            ClientDisposedError: If the client has been closed.
            httpx.HTTPError: If the request fails or returns an error status.
            pydantic.ValidationError: If the response body is invalid.
        """
        self._check_disposed()

        return await self._account.get_or_fetch(self._fetch_account, refresh=refresh)

    async def _fetch_account(self) -> UserAccount:
        response = await self._send("get_account", endpoints.Directory.USER_ACCOUNT)
        response.raise_for_status()

        return UserAccount.model_validate_json(response.content)

    async def _get_organization_id(self) -> UUID:
        """Retrieve the user's organization id (from the cached account)."""
        account = await self.get_account()

        return account.organization_id

    async def get_network_domain(self, network_domain_id: str) -> NetworkDomain | None:
        """Retrieve a network domain by id.

        Args:
            network_domain_id: The id of the network domain to retrieve.

        Returns:
            The network domain, or None if no network domain exists with
            the specified id.

        Raises:
            ValueError: If network_domain_id is empty.
            ClientDisposedError: If the client has been closed.
            CloudControlApiError: If the API rejects the request for any
                reason other than the network domain not being found.
            httpx.HTTPError: If the request could not be sent.
            pydantic.ValidationError: If a response body is invalid.
        """
        self._check_disposed()
        if not network_domain_id:
            msg = "network_domain_id cannot be empty"
            raise ValueError(msg)

        organization_id = await self._get_organization_id()

        response = await self._send(
            "get_network_domain",
            endpoints.Network.GET_NETWORK_DOMAIN_BY_ID,
            organization_id=organization_id,
            network_domain_id=network_domain_id,
        )
        if not response.is_success:
            api_response = ApiResponseV2.model_validate_json(response.content)
            if api_response.response_code == ApiResponseCodeV2.RESOURCE_NOT_FOUND:
                logger.debug(
                    "Network domain not found",
                    network_domain_id=network_domain_id,
                    status_code=response.status_code,
                )
                return None

            logger.error(
                "API error response",
                operation="get_network_domain",
                response_code=api_response.response_code.value,
                error_message=api_response.message,
                status_code=response.status_code,
            )
            raise CloudControlApiError.from_api_response(
                api_response,
                response.status_code,
            )

        return NetworkDomain.model_validate_json(response.content)

    async def list_network_domains(
        self,
        datacenter_id: str,
        paging: Paging | None = None,
    ) -> NetworkDomains:
        """Retrieve a page of network domains in a datacenter.

        Args:
            datacenter_id: The id of the target datacenter (e.g. AU10, NA9).
            paging: Optional paging for the results. The server's default
                paging applies if omitted.

        Returns:
            The page of network domains.

        Raises:
            ValueError: If datacenter_id is empty.
            ClientDisposedError: If the client has been closed.
            CloudControlApiError: If the API returns an unsuccessful response.
            httpx.HTTPError: If the request could not be sent.
            pydantic.ValidationError: If the response body is invalid.
        """
        self._check_disposed()
        if not datacenter_id:
            msg = "datacenter_id cannot be empty"
            raise ValueError(msg)

        organization_id = await self._get_organization_id()

        paging_values = {}
        if paging is not None:
            paging_values = {
                "page_number": paging.page_number,
                "page_size": paging.page_size,
            }

        response = await self._send(
            "list_network_domains",
            endpoints.Network.LIST_NETWORK_DOMAINS,
            organization_id=organization_id,
            datacenter_id=datacenter_id,
            **paging_values,
        )
        if not response.is_success:
            error = CloudControlApiError.from_response(response)
            logger.error(
                "API error response",
                operation="list_network_domains",
                response_code=error.response_code.value,
                error_message=error.message,
                status_code=error.status_code,
            )
            raise error

        return NetworkDomains.model_validate_json(response.content)


def _validate_base_url(base_url: str | httpx.URL | None) -> None:
    if base_url is None or not str(base_url):
        msg = "base_url cannot be empty"
        raise ValueError(msg)
    try:
        url = httpx.URL(base_url)
    except httpx.InvalidURL as exc:
        msg = f"base_url is not a valid URL: {base_url}"
        raise ValueError(msg) from exc
    if url.is_relative_url:
        msg = f"base_url must be an absolute URL: {base_url}"
        raise ValueError(msg)
