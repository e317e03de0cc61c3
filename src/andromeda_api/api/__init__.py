"""
Andromeda REST API client.

* :class:`AndromedaClient` exposes one coroutine per provider endpoint.
* :class:`AndromedaAdapter` wraps a client for connectivity verification.
* :mod:`.endpoints` holds the declarative endpoint table and the pure
  request-building helpers.
"""

from .adapter import AndromedaAdapter, VerificationResult
from .base import DEFAULT_TIMEOUT, BaseAPIClient, RequestDescriptor
from .client import AndromedaClient
from .errors import (
    AndromedaError,
    APIError,
    ProviderError,
    RequestBuildError,
    RequestFailedError,
    RequestTimeoutError,
    ResponseDecodeError,
    TransportError,
    ValidationError,
)
from .models import (
    ChangePanicPermissionInput,
    ChangeUserRoleInput,
    Credentials,
    Customer,
    GetCustomerInput,
    GetCustomersInput,
    GetMyAlarmUsersInput,
    GetPanicCheckInput,
    GetPartitionsInput,
    GetSiteInput,
    GetUserObjectsInput,
    GetZonesInput,
    MyAlarmChangeResult,
    MyAlarmUser,
    PanicCheckResult,
    PanicCheckStarted,
    Partition,
    Site,
    StartPanicCheckInput,
    UserObject,
    Zone,
)

__all__ = [
    "AndromedaAdapter",
    "AndromedaClient",
    "AndromedaError",
    "APIError",
    "BaseAPIClient",
    "ChangePanicPermissionInput",
    "ChangeUserRoleInput",
    "Credentials",
    "Customer",
    "DEFAULT_TIMEOUT",
    "GetCustomerInput",
    "GetCustomersInput",
    "GetMyAlarmUsersInput",
    "GetPanicCheckInput",
    "GetPartitionsInput",
    "GetSiteInput",
    "GetUserObjectsInput",
    "GetZonesInput",
    "MyAlarmChangeResult",
    "MyAlarmUser",
    "PanicCheckResult",
    "PanicCheckStarted",
    "Partition",
    "ProviderError",
    "RequestBuildError",
    "RequestDescriptor",
    "RequestFailedError",
    "RequestTimeoutError",
    "ResponseDecodeError",
    "Site",
    "StartPanicCheckInput",
    "TransportError",
    "UserObject",
    "ValidationError",
    "VerificationResult",
    "Zone",
]
