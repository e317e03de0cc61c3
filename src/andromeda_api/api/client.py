"""
Operation facade for the Andromeda REST API.

Every public coroutine follows the same pipeline: validate the input record,
build a :class:`~andromeda_api.api.base.RequestDescriptor`, execute it once
and decode the body into typed records. Validation errors are raised before
any network I/O.

Example
-------
>>> async with AndromedaClient() as client:  # doctest: +SKIP
...     site = await client.get_site(GetSiteInput("6b2f...", credentials))
"""

from __future__ import annotations

from typing import Any, List

from . import endpoints
from .base import BaseAPIClient
from .endpoints import Endpoint
from .models import (
    ChangePanicPermissionInput,
    ChangeUserRoleInput,
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


class AndromedaClient(BaseAPIClient):
    """Async client exposing one coroutine per Andromeda endpoint."""

    async def _call(self, endpoint: Endpoint, params: Any) -> Any:
        endpoints.validate_input(endpoint, params)
        request = endpoints.build_request(endpoint, params)
        body = await self._execute(endpoint.method, request)
        return endpoints.decode_response(endpoint, body)

    async def get_site(self, params: GetSiteInput) -> Site:
        """Fetch a site card by identifier or account number."""
        return await self._call(endpoints.GET_SITE, params)

    async def get_customers(self, params: GetCustomersInput) -> List[Customer]:
        """List the responsible persons of a site."""
        return await self._call(endpoints.GET_CUSTOMERS, params)

    async def get_customer(self, params: GetCustomerInput) -> Customer:
        return await self._call(endpoints.GET_CUSTOMER, params)

    async def start_panic_check(self, params: StartPanicCheckInput) -> PanicCheckStarted:
        """Start a panic-button (KTS) check; poll the result with :meth:`get_panic_check`."""
        return await self._call(endpoints.START_PANIC_CHECK, params)

    async def get_panic_check(self, params: GetPanicCheckInput) -> PanicCheckResult:
        return await self._call(endpoints.GET_PANIC_CHECK, params)

    async def get_myalarm_users(self, params: GetMyAlarmUsersInput) -> List[MyAlarmUser]:
        """List MyAlarm application users linked to a site."""
        return await self._call(endpoints.GET_MYALARM_USERS, params)

    async def change_user_role(self, params: ChangeUserRoleInput) -> MyAlarmChangeResult:
        """Change a MyAlarm user's role, or unlink the user with ``role="unlink"``."""
        return await self._call(endpoints.CHANGE_USER_ROLE, params)

    async def change_panic_permission(self, params: ChangePanicPermissionInput) -> MyAlarmChangeResult:
        """Allow or forbid panic-button use from the MyAlarm app. An empty reply yields an empty result."""
        return await self._call(endpoints.CHANGE_PANIC_PERMISSION, params)

    async def get_user_objects(self, params: GetUserObjectsInput) -> List[UserObject]:
        """List the sites available to a MyAlarm user identified by phone number."""
        return await self._call(endpoints.GET_USER_OBJECTS, params)

    async def get_partitions(self, params: GetPartitionsInput) -> List[Partition]:
        return await self._call(endpoints.GET_PARTITIONS, params)

    async def get_zones(self, params: GetZonesInput) -> List[Zone]:
        return await self._call(endpoints.GET_ZONES, params)
