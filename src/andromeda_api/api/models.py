"""
Input and response records for the Andromeda API.

Inputs are plain dataclasses composed with a shared :class:`Credentials`
value. Responses are slotted dataclasses whose fields map to the provider's
PascalCase JSON keys through the ``wire`` metadata entry; decoding is handled
once by :meth:`ResponseRecord.from_payload`.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Dict, List, Mapping, Type, TypeVar

from .errors import ResponseDecodeError

RecordT = TypeVar("RecordT", bound="ResponseRecord")

ROLE_ADMIN = "admin"
ROLE_USER = "user"
ROLE_UNLINK = "unlink"
ROLES = frozenset({ROLE_ADMIN, ROLE_USER, ROLE_UNLINK})


@dataclass(slots=True, frozen=True)
class Credentials:
    """API key and base URL required by every request."""

    api_key: str
    host: str

    def __repr__(self) -> str:
        return f"Credentials(api_key='***', host={self.host!r})"


# ---------------------------------------------------------------------------
# Inputs


@dataclass(slots=True)
class GetSiteInput:
    """``site_id`` is the site GUID or number; legacy integer numbers must be >= 1."""

    site_id: str | int
    credentials: Credentials
    user_name: str = ""


@dataclass(slots=True)
class GetCustomersInput:
    site_id: str
    credentials: Credentials
    user_name: str = ""


@dataclass(slots=True)
class GetCustomerInput:
    customer_id: str
    credentials: Credentials
    user_name: str = ""


@dataclass(slots=True)
class StartPanicCheckInput:
    """
    Parameters for launching a panic-button (KTS) check.

    ``check_interval`` is the check window in seconds; ``0`` keeps the
    provider default, any other value must lie strictly between 30 and 180.
    """

    site_id: str
    credentials: Credentials
    check_interval: int = 0
    stop_on_event: bool = True
    user_name: str = ""


@dataclass(slots=True)
class GetPanicCheckInput:
    check_panic_id: str
    credentials: Credentials
    user_name: str = ""


@dataclass(slots=True)
class GetMyAlarmUsersInput:
    site_id: str
    credentials: Credentials
    user_name: str = ""


@dataclass(slots=True)
class ChangeUserRoleInput:
    """``role`` is one of ``admin``, ``user`` or ``unlink``."""

    customer_id: str
    role: str
    credentials: Credentials
    user_name: str = ""


@dataclass(slots=True)
class ChangePanicPermissionInput:
    customer_id: str
    is_panic: bool
    credentials: Credentials
    user_name: str = ""


@dataclass(slots=True)
class GetUserObjectsInput:
    """``phone`` must use the ``+7XXXXXXXXXX`` format."""

    phone: str
    credentials: Credentials
    user_name: str = ""


@dataclass(slots=True)
class GetPartitionsInput:
    site_id: str
    credentials: Credentials
    user_name: str = ""


@dataclass(slots=True)
class GetZonesInput:
    site_id: str
    credentials: Credentials
    user_name: str = ""


# ---------------------------------------------------------------------------
# Responses


def wire(name: str, default: Any) -> Any:
    """Declare a response field bound to the JSON key ``name``."""
    return field(default=default, metadata={"wire": name})


_SCALAR_TYPES: Dict[str, tuple[type, ...]] = {
    "str": (str,),
    "int": (int,),
    "bool": (bool,),
    "float": (int, float),
}


def _coerce(value: Any, annotation: str, key: str) -> Any:
    accepted = _SCALAR_TYPES.get(annotation)
    if accepted is None:
        raise TypeError(f"Unsupported response field type {annotation!r} for {key!r}.")
    if isinstance(value, bool) and annotation != "bool":
        raise ResponseDecodeError(f"Field {key!r} expected {annotation}, got bool.")
    if not isinstance(value, accepted):
        raise ResponseDecodeError(f"Field {key!r} expected {annotation}, got {type(value).__name__}.")
    if annotation == "float":
        try:
            return float(value)
        except OverflowError as exc:
            raise ResponseDecodeError(f"Field {key!r} is out of range for a float.") from exc
    return value


class ResponseRecord:
    """Mixin providing JSON decoding for flat response dataclasses."""

    __slots__ = ()
    endpoint_label: ClassVar[str] = "record"

    @classmethod
    def from_payload(cls: Type[RecordT], payload: Any) -> RecordT:
        """
        Build the record from a decoded JSON object.

        Keys that are absent or ``null`` keep the field's zero value; unknown
        keys are ignored. A value of the wrong JSON type raises
        :class:`ResponseDecodeError`.
        """

        if not isinstance(payload, Mapping):
            raise ResponseDecodeError(f"Expected a JSON object for {cls.endpoint_label}, got {type(payload).__name__}.")
        values: Dict[str, Any] = {}
        for item in fields(cls):  # type: ignore[arg-type]
            key = item.metadata.get("wire", item.name)
            value = payload.get(key)
            if value is None:
                continue
            values[item.name] = _coerce(value, str(item.type), key)
        return cls(**values)

    @classmethod
    def from_payload_list(cls: Type[RecordT], payload: Any) -> List[RecordT]:
        """Decode a JSON array of objects; ``null`` is treated as an empty list."""

        if payload is None:
            return []
        if not isinstance(payload, list):
            raise ResponseDecodeError(f"Expected a JSON array of {cls.endpoint_label} objects, got {type(payload).__name__}.")
        return [cls.from_payload(entry) for entry in payload]


@dataclass(slots=True)
class Site(ResponseRecord):
    """Site card as returned by ``GET /Sites``."""

    endpoint_label: ClassVar[str] = "site"

    row_number: int = wire("RowNumber", 0)
    id: str = wire("Id", "")
    account_number: int = wire("AccountNumber", 0)
    cloud_object_id: int = wire("CloudObjectID", 0)
    name: str = wire("Name", "")
    object_password: str = wire("ObjectPassword", "")
    address: str = wire("Address", "")
    phone1: str = wire("Phone1", "")
    phone2: str = wire("Phone2", "")
    type_name: str = wire("TypeName", "")
    is_fire: bool = wire("IsFire", False)
    is_arm: bool = wire("IsArm", False)
    is_panic: bool = wire("IsPanic", False)
    device_type_name: str = wire("DeviceTypeName", "")
    event_template_name: str = wire("EventTemplateName", "")
    contract_number: str = wire("ContractNumber", "")
    contract_price: float = wire("ContractPrice", 0.0)
    money_balance: float = wire("MoneyBalance", 0.0)
    payment_date: str = wire("PaymentDate", "")
    debt_inform_level: int = wire("DebtInformLevel", 0)
    disabled: bool = wire("Disabled", False)
    disable_reason: int = wire("DisableReason", 0)
    disable_date: str = wire("DisableDate", "")
    auto_enable: bool = wire("AutoEnable", False)
    auto_enable_date: str = wire("AutoEnableDate", "")
    customers_comment: str = wire("CustomersComment", "")
    comment_for_operator: str = wire("CommentForOperator", "")
    comment_for_guard: str = wire("CommentForGuard", "")
    map_file_name: str = wire("MapFileName", "")
    web_link: str = wire("WebLink", "")
    control_time: int = wire("ControlTime", 0)
    ct_ignore_system_event: bool = wire("CTIgnoreSystemEvent", False)
    is_contract_price_force_update: bool = wire("IsContractPriceForceUpdate", False)
    is_money_balance_force_update: bool = wire("IsMoneyBalanceForceUpdate", False)
    is_payment_date_force_update: bool = wire("IsPaymentDateForceUpdate", False)
    is_state_arm: bool = wire("IsStateArm", False)
    is_state_alarm: bool = wire("IsStateAlarm", False)
    is_state_part_arm: bool = wire("IsStatePartArm", False)
    state_arm_disarm_datetime: str = wire("StateArmDisArmDateTime", "")


@dataclass(slots=True)
class Customer(ResponseRecord):
    """Responsible person attached to a site."""

    endpoint_label: ClassVar[str] = "customer"

    id: str = wire("Id", "")
    order_number: int = wire("OrderNumber", 0)
    user_number: int = wire("UserNumber", 0)
    name: str = wire("ObjCustName", "")
    title: str = wire("ObjCustTitle", "")
    phone1: str = wire("ObjCustPhone1", "")
    phone2: str = wire("ObjCustPhone2", "")
    phone3: str = wire("ObjCustPhone3", "")
    phone4: str = wire("ObjCustPhone4", "")
    phone5: str = wire("ObjCustPhone5", "")
    address: str = wire("ObjCustAddress", "")
    is_visible_in_cabinet: bool = wire("IsVisibleInCabinet", False)
    reclosing_request: bool = wire("ReclosingRequest", False)
    reclosing_failure: bool = wire("ReclosingFailure", False)
    pin_code: str = wire("PINCode", "")


@dataclass(slots=True)
class PanicCheckStarted(ResponseRecord):
    endpoint_label: ClassVar[str] = "panic check"

    status: int = wire("Status", 0)
    description: str = wire("Description", "")
    check_panic_id: str = wire("CheckPanicId", "")


@dataclass(slots=True)
class PanicCheckResult(ResponseRecord):
    endpoint_label: ClassVar[str] = "panic check result"

    status: int = wire("Status", 0)
    description: str = wire("Description", "")


@dataclass(slots=True)
class MyAlarmUser(ResponseRecord):
    """MyAlarm application user linked to a site."""

    endpoint_label: ClassVar[str] = "MyAlarm user"

    customer_id: str = wire("CustomerID", "")
    mobile_phone: str = wire("MobilePhone", "")
    myalarm_phone: str = wire("MyAlarmPhone", "")
    role: str = wire("Role", "")
    is_panic: bool = wire("IsPanic", False)


@dataclass(slots=True)
class MyAlarmChangeResult(ResponseRecord):
    """Acknowledgement of a MyAlarm update; the provider may send an empty body."""

    endpoint_label: ClassVar[str] = "MyAlarm change"

    message: str = wire("Message", "")


@dataclass(slots=True)
class UserObject(ResponseRecord):
    """Site visible to a MyAlarm user, keyed by phone number."""

    endpoint_label: ClassVar[str] = "user object"

    object_guid: str = wire("ObjectGUID", "")
    customer_id: str = wire("CustomerID", "")
    role: str = wire("Role", "")
    is_panic: bool = wire("IsPanic", False)


@dataclass(slots=True)
class Partition(ResponseRecord):
    """Arm/disarm group of a site's control panel."""

    endpoint_label: ClassVar[str] = "partition"

    id: str = wire("Id", "")
    part_number: int = wire("PartNumber", 0)
    object_number: int = wire("ObjectNumber", 0)
    description: str = wire("PartDesc", "")
    equipment: str = wire("PartEquip", "")
    is_state_arm: bool = wire("IsStateArm", False)
    is_state_alarm: bool = wire("IsStateAlarm", False)
    state_arm_disarm_datetime: str = wire("StateArmDisArmDateTime", "")


@dataclass(slots=True)
class Zone(ResponseRecord):
    """Individual sensor loop."""

    endpoint_label: ClassVar[str] = "zone"

    id: str = wire("Id", "")
    zone_number: int = wire("ZoneNumber", 0)
    description: str = wire("ZoneDesc", "")
    equipment: str = wire("ZoneEquip", "")
