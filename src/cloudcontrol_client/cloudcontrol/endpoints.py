"""Request templates for the CloudControl API.

Endpoints are relative to the client's base address, which includes the API
version (e.g. ``https://api-au.dimensiondata.com/caas/2.4/``).
"""

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote


@dataclass(frozen=True)
class RequestTemplate:
    """A templated GET request: path placeholders plus named query parameters.

    ``query`` maps query parameter names to template parameter names. Query
    parameters whose template value is missing or ``None`` are not sent.
    """

    path: str
    query: dict[str, str] = field(default_factory=dict)

    def build(self, **values: Any) -> tuple[str, dict[str, str]]:
        """Substitute template values.

        Args:
            **values: Template parameter values by name.

        Returns:
            Tuple of (endpoint, query parameters).

        Raises:
            KeyError: If a path placeholder has no value.
        """
        endpoint = self.path.format(
            **{name: quote(str(value), safe="") for name, value in values.items()},
        )
        params = {
            query_name: str(values[value_name])
            for query_name, value_name in self.query.items()
            if values.get(value_name) is not None
        }
        return endpoint, params


class Directory:
    """User and organization requests."""

    USER_ACCOUNT = RequestTemplate("myaccount")


class Network:
    """Network requests."""

    GET_NETWORK_DOMAIN_BY_ID = RequestTemplate(
        "{organization_id}/network/networkDomain/{network_domain_id}",
    )

    LIST_NETWORK_DOMAINS = RequestTemplate(
        "{organization_id}/network/networkDomain",
        query={
            "datacenterId": "datacenter_id",
            "pageNumber": "page_number",
            "pageSize": "page_size",
        },
    )
