from __future__ import annotations

import json

import httpx
import pytest

from andromeda_api.api import Credentials, ResponseDecodeError
from andromeda_api.api import endpoints
from andromeda_api.api.models import (
    ChangePanicPermissionInput,
    ChangeUserRoleInput,
    GetCustomerInput,
    GetSiteInput,
    GetUserObjectsInput,
    MyAlarmChangeResult,
    StartPanicCheckInput,
)


def _query(url: str) -> dict[str, str]:
    return dict(httpx.URL(url).params)


def test_catalogue_covers_every_operation():
    names = {endpoint.name for endpoint in endpoints.CATALOGUE}

    assert names == {
        "get_site",
        "get_customers",
        "get_customer",
        "start_panic_check",
        "get_panic_check",
        "get_myalarm_users",
        "change_user_role",
        "change_panic_permission",
        "get_user_objects",
        "get_partitions",
        "get_zones",
    }


def test_build_request_adds_identifier_and_path(credentials):
    request = endpoints.build_request(endpoints.GET_SITE, GetSiteInput("site-1", credentials))

    assert request.url == "https://andromeda.example.com/api/Sites?id=site-1"
    assert request.body == b""
    assert request.api_key == "secret-key"
    assert request.content_type is None


def test_build_request_strips_trailing_slash_from_host():
    credentials = Credentials(api_key="k", host="https://andromeda.example.com/api/")

    request = endpoints.build_request(endpoints.GET_CUSTOMER, GetCustomerInput("cust-1", credentials))

    assert request.url.startswith("https://andromeda.example.com/api/Customers?")
    assert _query(request.url) == {"id": "cust-1"}


def test_user_name_only_added_when_present(credentials):
    without_user = endpoints.build_request(endpoints.GET_SITE, GetSiteInput("site-1", credentials))
    with_user = endpoints.build_request(endpoints.GET_SITE, GetSiteInput("site-1", credentials, user_name="Operator One"))

    assert "userName" not in _query(without_user.url)
    assert _query(with_user.url)["userName"] == "Operator One"
    assert "userName=Operator+One" in with_user.url


def test_panic_check_serialises_booleans_and_optional_interval(credentials):
    default_interval = endpoints.build_request(endpoints.START_PANIC_CHECK, StartPanicCheckInput("site-1", credentials))
    custom = endpoints.build_request(
        endpoints.START_PANIC_CHECK,
        StartPanicCheckInput("site-1", credentials, check_interval=60, stop_on_event=False),
    )

    assert _query(default_interval.url) == {"siteId": "site-1", "stopOnEvent": "True"}
    assert _query(custom.url) == {"checkInterval": "60", "siteId": "site-1", "stopOnEvent": "False"}


def test_query_keys_are_sorted(credentials):
    request = endpoints.build_request(
        endpoints.CHANGE_USER_ROLE,
        ChangeUserRoleInput("cust-1", "admin", credentials, user_name="ops"),
    )

    assert request.url.endswith("/MyAlarm?custId=cust-1&role=admin&userName=ops")


def test_panic_permission_uses_provider_boolean_literals(credentials):
    allowed = endpoints.build_request(endpoints.CHANGE_PANIC_PERMISSION, ChangePanicPermissionInput("cust-1", True, credentials))
    denied = endpoints.build_request(endpoints.CHANGE_PANIC_PERMISSION, ChangePanicPermissionInput("cust-1", False, credentials))

    assert _query(allowed.url)["isPanic"] == "True"
    assert _query(denied.url)["isPanic"] == "False"


def test_user_objects_sends_phone_as_json_body(credentials):
    request = endpoints.build_request(
        endpoints.GET_USER_OBJECTS,
        GetUserObjectsInput("+79991234567", credentials, user_name="ops"),
    )

    assert json.loads(request.body) == {"Phone": "+79991234567"}
    assert request.content_type == "application/json"
    assert _query(request.url) == {"userName": "ops"}
    assert request.url.startswith("https://andromeda.example.com/api/MyAlarm/UserObjects")


def test_user_objects_without_user_name_has_no_query(credentials):
    request = endpoints.build_request(endpoints.GET_USER_OBJECTS, GetUserObjectsInput("+79991234567", credentials))

    assert request.url == "https://andromeda.example.com/api/MyAlarm/UserObjects"


def test_request_descriptor_hides_api_key_from_repr(credentials):
    request = endpoints.build_request(endpoints.GET_SITE, GetSiteInput("site-1", credentials))

    assert "secret-key" not in repr(request)
    assert "secret-key" not in repr(credentials)
    assert request.headers() == {"apiKey": "secret-key"}


def test_format_value_uses_title_case_booleans():
    assert endpoints.format_value(True) == "True"
    assert endpoints.format_value(False) == "False"
    assert endpoints.format_value(42) == "42"


def test_decode_allows_empty_body_for_myalarm_updates():
    assert endpoints.decode_response(endpoints.CHANGE_USER_ROLE, b"") == MyAlarmChangeResult()
    assert endpoints.decode_response(endpoints.CHANGE_PANIC_PERMISSION, b"  ") == MyAlarmChangeResult()


def test_decode_rejects_empty_body_elsewhere():
    with pytest.raises(ResponseDecodeError):
        endpoints.decode_response(endpoints.GET_SITE, b"")


def test_decode_treats_null_list_as_empty():
    assert endpoints.decode_response(endpoints.GET_ZONES, b"null") == []


def test_decode_rejects_object_where_list_expected():
    with pytest.raises(ResponseDecodeError, match="array"):
        endpoints.decode_response(endpoints.GET_ZONES, b'{"Id": "z"}')


def test_decode_rejects_wrong_field_type():
    with pytest.raises(ResponseDecodeError, match="ZoneNumber"):
        endpoints.decode_response(endpoints.GET_ZONES, b'[{"Id": "z", "ZoneNumber": "one"}]')


def test_client_timeout_must_be_positive(make_client):
    with pytest.raises(ValueError):
        make_client(lambda request: httpx.Response(200), timeout=0)


def test_decode_rejects_float_field_out_of_range():
    body = ('{"ContractPrice": ' + "9" * 400 + "}").encode("utf-8")

    with pytest.raises(ResponseDecodeError, match="ContractPrice"):
        endpoints.decode_response(endpoints.GET_SITE, body)
