"""API body types for the CloudControl REST API.

Pydantic models representing the structure of data exchanged with the
CloudControl API. Field names follow Python conventions; the camelCase names
used on the wire are handled by alias generation.
"""

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for CloudControl API bodies (camelCase on the wire)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        # The API sends null for absent values; fall back to field defaults
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class Credentials(BaseModel):
    """User name and password used to authenticate to CloudControl."""

    model_config = ConfigDict(frozen=True)

    user_name: str = Field(min_length=1)
    password: str = Field(min_length=1, repr=False)


class Paging(BaseModel):
    """Caller-controlled paging for list operations."""

    model_config = ConfigDict(frozen=True)

    page_number: int = Field(1, ge=1)
    page_size: int = Field(250, ge=1)


class UserAccount(ApiModel):
    """The authenticated user's account information."""

    user_name: str = ""
    full_name: str = ""
    first_name: str = ""
    last_name: str = ""
    email_address: str = ""
    department: str = ""

    # Every organization-scoped request is routed through this id
    organization_id: UUID = Field(alias="orgId")


class NetworkDomainType(str, Enum):
    """Service level of a network domain."""

    ESSENTIALS = "ESSENTIALS"
    ADVANCED = "ADVANCED"


class NetworkDomain(ApiModel):
    """A network domain within a datacenter."""

    id: str
    datacenter_id: str = ""
    name: str = ""
    description: str = ""
    type: NetworkDomainType | None = None
    snat_ipv4_address: str | None = Field(None, alias="snatIpv4Address")
    create_time: datetime | None = None
    state: str = ""


class NetworkDomains(ApiModel):
    """A page of network domains."""

    items: list[NetworkDomain] = Field(default_factory=list, alias="networkDomain")
    page_number: int = 1
    page_count: int = 0
    total_count: int = 0
    page_size: int = 0


class ApiResponseCodeV2(str, Enum):
    """Response codes returned by the CloudControl API (v2 envelope)."""

    OK = "OK"
    IN_PROGRESS = "IN_PROGRESS"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    RESOURCE_BUSY = "RESOURCE_BUSY"
    RESOURCE_LOCKED = "RESOURCE_LOCKED"
    RESOURCE_NAME_NOT_UNIQUE = "RESOURCE_NAME_NOT_UNIQUE"
    INVALID_INPUT_DATA = "INVALID_INPUT_DATA"
    INVALID_REQUEST = "INVALID_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    OPERATION_NOT_SUPPORTED = "OPERATION_NOT_SUPPORTED"
    SYSTEM_ERROR = "SYSTEM_ERROR"
    UNEXPECTED_ERROR = "UNEXPECTED_ERROR"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def _missing_(cls, value: object) -> "ApiResponseCodeV2":
        return cls.UNKNOWN


class ApiResponseV2(ApiModel):
    """Response envelope returned by the API for operations and errors."""

    operation: str = ""
    response_code: ApiResponseCodeV2 = ApiResponseCodeV2.UNKNOWN
    message: str = ""
    info: list[dict] = Field(default_factory=list)
    warning: list[dict] = Field(default_factory=list)
    error: list[dict] = Field(default_factory=list)
    request_id: str = ""
