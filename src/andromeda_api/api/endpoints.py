"""
Declarative catalogue of Andromeda endpoints.

Each :class:`Endpoint` names the HTTP verb, path, parameters and response
record of one provider capability. :func:`validate_input`,
:func:`build_request` and :func:`decode_response` interpret that table, so
adding an endpoint means adding a record here and a thin method on
:class:`~andromeda_api.api.client.AndromedaClient`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, List, Sequence, Tuple, Type

import httpx

from . import validation
from .base import JSON_CONTENT_TYPE, RequestDescriptor
from .errors import RequestBuildError, ResponseDecodeError
from .models import (
    Customer,
    MyAlarmChangeResult,
    MyAlarmUser,
    PanicCheckResult,
    PanicCheckStarted,
    Partition,
    ResponseRecord,
    Site,
    UserObject,
    Zone,
)

PATH_SITES = "/Sites"
PATH_CUSTOMERS = "/Customers"
PATH_CHECK_PANIC = "/CheckPanic"
PATH_MY_ALARM = "/MyAlarm"
PATH_MY_ALARM_USER_OBJECTS = "/MyAlarm/UserObjects"
PATH_PARTS = "/Parts"
PATH_ZONES = "/Zones"

USER_NAME_PARAM = "userName"

QUERY = "query"
BODY = "body"


@dataclass(frozen=True, slots=True)
class Param:
    """
    One input attribute and how it travels on the wire.

    ``required`` parameters are validated as identifiers and ``flag``
    parameters as booleans; both are always sent. Optional ones are omitted
    when zero or empty.
    """

    attr: str
    wire: str
    label: str
    required: bool = True
    location: str = QUERY
    flag: bool = False


@dataclass(frozen=True, slots=True)
class Endpoint:
    name: str
    method: str
    path: str
    params: Tuple[Param, ...]
    response: Type[ResponseRecord]
    many: bool = False
    allow_empty: bool = False
    checks: Tuple[Callable[[Any], None], ...] = ()

    @property
    def json_body(self) -> bool:
        return any(param.location == BODY for param in self.params)


def format_value(value: Any) -> str:
    """Serialise a query value the way the provider expects (``True``/``False`` for booleans)."""
    if isinstance(value, bool):
        return "True" if value else "False"
    return str(value)


def _is_unset(value: Any) -> bool:
    return value is None or value == "" or (isinstance(value, int) and not isinstance(value, bool) and value == 0)


def validate_input(endpoint: Endpoint, params: Any) -> None:
    """Run identifier, endpoint-specific and credential checks in that order."""

    for param in endpoint.params:
        value = getattr(params, param.attr)
        if param.flag:
            validation.validate_flag(value, param.attr)
        elif param.required:
            validation.require_value(value, param.attr, param.label)
    for check in endpoint.checks:
        check(params)
    validation.validate_credentials(params.credentials)


def build_request(endpoint: Endpoint, params: Any) -> RequestDescriptor:
    """Turn a validated input record into a :class:`RequestDescriptor`."""

    credentials = params.credentials
    query: List[Tuple[str, str]] = []
    body: dict[str, Any] = {}
    for param in endpoint.params:
        value = getattr(params, param.attr)
        if param.location == BODY:
            body[param.wire] = value
        elif param.required or param.flag or not _is_unset(value):
            query.append((param.wire, format_value(value)))
    if params.user_name:
        query.append((USER_NAME_PARAM, params.user_name))
    query.sort(key=lambda item: item[0])

    try:
        url = httpx.URL(credentials.host.strip().rstrip("/") + endpoint.path, params=query)
    except httpx.InvalidURL as exc:
        raise RequestBuildError(f"Cannot build {endpoint.name} URL from host {credentials.host!r}: {exc}") from exc

    if endpoint.json_body:
        return RequestDescriptor(
            url=str(url),
            body=json.dumps(body, ensure_ascii=False).encode("utf-8"),
            api_key=credentials.api_key,
            content_type=JSON_CONTENT_TYPE,
        )
    return RequestDescriptor(url=str(url), body=b"", api_key=credentials.api_key)


def decode_response(endpoint: Endpoint, body: bytes) -> Any:
    """Decode a 200 body into the endpoint's record (or list of records)."""

    if not body.strip():
        if endpoint.allow_empty:
            return endpoint.response()
        raise ResponseDecodeError(f"Empty response body from {endpoint.name}.")
    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise ResponseDecodeError(f"Failed to decode JSON from {endpoint.name}: {exc}") from exc
    if endpoint.many:
        return endpoint.response.from_payload_list(payload)
    return endpoint.response.from_payload(payload)


def _site_param(wire: str = "siteId") -> Param:
    return Param("site_id", wire, "site identifier")


def _check_interval(params: Any) -> None:
    validation.validate_check_interval(params.check_interval)


def _check_role(params: Any) -> None:
    validation.validate_role(params.role)


def _check_phone(params: Any) -> None:
    validation.validate_phone(params.phone)


GET_SITE = Endpoint("get_site", "GET", PATH_SITES, (_site_param("id"),), Site)
GET_CUSTOMERS = Endpoint("get_customers", "GET", PATH_CUSTOMERS, (_site_param(),), Customer, many=True)
GET_CUSTOMER = Endpoint(
    "get_customer",
    "GET",
    PATH_CUSTOMERS,
    (Param("customer_id", "id", "responsible person identifier"),),
    Customer,
)
START_PANIC_CHECK = Endpoint(
    "start_panic_check",
    "POST",
    PATH_CHECK_PANIC,
    (
        _site_param(),
        Param("stop_on_event", "stopOnEvent", "stop-on-event flag", flag=True),
        Param("check_interval", "checkInterval", "check interval", required=False),
    ),
    PanicCheckStarted,
    checks=(_check_interval,),
)
GET_PANIC_CHECK = Endpoint(
    "get_panic_check",
    "GET",
    PATH_CHECK_PANIC,
    (Param("check_panic_id", "checkPanicId", "panic check identifier"),),
    PanicCheckResult,
)
GET_MYALARM_USERS = Endpoint("get_myalarm_users", "GET", PATH_MY_ALARM, (_site_param(),), MyAlarmUser, many=True)
CHANGE_USER_ROLE = Endpoint(
    "change_user_role",
    "PUT",
    PATH_MY_ALARM,
    (Param("customer_id", "custId", "user identifier"), Param("role", "role", "user role")),
    MyAlarmChangeResult,
    allow_empty=True,
    checks=(_check_role,),
)
CHANGE_PANIC_PERMISSION = Endpoint(
    "change_panic_permission",
    "PUT",
    PATH_MY_ALARM,
    (Param("customer_id", "custId", "user identifier"), Param("is_panic", "isPanic", "panic permission flag", flag=True)),
    MyAlarmChangeResult,
    allow_empty=True,
)
GET_USER_OBJECTS = Endpoint(
    "get_user_objects",
    "GET",
    PATH_MY_ALARM_USER_OBJECTS,
    (Param("phone", "Phone", "phone number", location=BODY),),
    UserObject,
    many=True,
    checks=(_check_phone,),
)
GET_PARTITIONS = Endpoint("get_partitions", "GET", PATH_PARTS, (_site_param(),), Partition, many=True)
GET_ZONES = Endpoint("get_zones", "GET", PATH_ZONES, (_site_param(),), Zone, many=True)

CATALOGUE: Sequence[Endpoint] = (
    GET_SITE,
    GET_CUSTOMERS,
    GET_CUSTOMER,
    START_PANIC_CHECK,
    GET_PANIC_CHECK,
    GET_MYALARM_USERS,
    CHANGE_USER_ROLE,
    CHANGE_PANIC_PERMISSION,
    GET_USER_OBJECTS,
    GET_PARTITIONS,
    GET_ZONES,
)
