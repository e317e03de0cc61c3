"""
Typer application exposing every Andromeda endpoint from the shell.

Connection settings come from :func:`andromeda_api.config.load_settings` and
can be overridden with the global options. Results are printed as JSON so the
output can be piped into other tooling.
"""

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from typing import Any, Awaitable, Callable, Optional

import anyio
import typer

from ..api import (
    AndromedaAdapter,
    AndromedaClient,
    AndromedaError,
    ChangePanicPermissionInput,
    ChangeUserRoleInput,
    GetCustomerInput,
    GetCustomersInput,
    GetMyAlarmUsersInput,
    GetPanicCheckInput,
    GetPartitionsInput,
    GetSiteInput,
    GetUserObjectsInput,
    GetZonesInput,
    ProviderError,
    StartPanicCheckInput,
    ValidationError,
)
from ..config import AndromedaSettings, load_settings
from ..core.logging import configure_logging

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Command-line client for the Andromeda alarm-monitoring API.\n\n"
        "Command groups:\n"
        "- customers: responsible persons of a site.\n"
        "- panic: start panic-button checks and read their results.\n"
        "- myalarm: MyAlarm app users, roles and panic permissions."
    ),
)
customers_app = typer.Typer(help="Responsible persons attached to a site.")
app.add_typer(customers_app, name="customers")
panic_app = typer.Typer(help="Panic-button (KTS) checks.")
app.add_typer(panic_app, name="panic")
myalarm_app = typer.Typer(help="MyAlarm application users and permissions.")
app.add_typer(myalarm_app, name="myalarm")


def build_client(settings: AndromedaSettings) -> AndromedaClient:
    return AndromedaClient(timeout=settings.timeout)


def _render(result: Any) -> str:
    if isinstance(result, list):
        payload: Any = [asdict(item) for item in result]
    elif is_dataclass(result):
        payload = asdict(result)
    else:
        payload = result
    return json.dumps(payload, ensure_ascii=False, indent=2)


def _require_settings(ctx: typer.Context) -> AndromedaSettings:
    settings = ctx.obj
    if not isinstance(settings, AndromedaSettings):
        raise typer.BadParameter("CLI settings not initialised.")
    return settings


def _run(ctx: typer.Context, call: Callable[[AndromedaClient, AndromedaSettings], Awaitable[Any]]) -> None:
    settings = _require_settings(ctx)

    async def _invoke() -> Any:
        async with build_client(settings) as client:
            return await call(client, settings)

    try:
        result = anyio.run(_invoke)
    except ValidationError as exc:
        typer.echo(f"Invalid input ({exc.field}): {exc}", err=True)
        raise typer.Exit(code=2) from exc
    except ProviderError as exc:
        suffix = f" [code {exc.result_code}]" if exc.result_code is not None else ""
        typer.echo(f"Provider rejected the request: {exc}{suffix}", err=True)
        raise typer.Exit(code=1) from exc
    except AndromedaError as exc:
        typer.echo(f"Request failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(_render(result))


@app.callback(invoke_without_command=False)
def main(
    ctx: typer.Context,
    host: Optional[str] = typer.Option(None, "--host", help="Andromeda API base URL, e.g. https://andromeda.example.com/api."),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="Value for the apiKey header."),
    user_name: Optional[str] = typer.Option(None, "--user-name", help="Operator name sent as userName."),
    timeout: Optional[float] = typer.Option(None, "--timeout", min=0.1, help="Request timeout in seconds (default 5)."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level (DEBUG, INFO, WARNING...)."),
) -> None:
    """Load settings from secrets/environment and apply command-line overrides."""

    configure_logging(log_level)
    try:
        settings = load_settings()
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    ctx.obj = settings.with_overrides(host=host, api_key=api_key, user_name=user_name, timeout=timeout)


@app.command("sites")
def sites(ctx: typer.Context, site_id: str = typer.Argument(..., help="Site GUID or account number.")) -> None:
    """Show a site card."""

    _run(ctx, lambda client, s: client.get_site(GetSiteInput(site_id, s.credentials(), user_name=s.user_name or "")))


@customers_app.command("list")
def customers_list(ctx: typer.Context, site_id: str = typer.Argument(..., help="Site identifier.")) -> None:
    """List responsible persons of a site."""

    _run(ctx, lambda client, s: client.get_customers(GetCustomersInput(site_id, s.credentials(), user_name=s.user_name or "")))


@customers_app.command("show")
def customers_show(ctx: typer.Context, customer_id: str = typer.Argument(..., help="Responsible person identifier.")) -> None:
    """Show a single responsible person."""

    _run(ctx, lambda client, s: client.get_customer(GetCustomerInput(customer_id, s.credentials(), user_name=s.user_name or "")))


@panic_app.command("start")
def panic_start(
    ctx: typer.Context,
    site_id: str = typer.Argument(..., help="Site identifier."),
    interval: int = typer.Option(0, "--interval", help="Check window in seconds (31-179); 0 keeps the provider default."),
    stop_on_event: bool = typer.Option(True, "--stop-on-event/--no-stop-on-event", help="Stop the check on the first panic event."),
) -> None:
    """Start a panic-button check."""

    _run(
        ctx,
        lambda client, s: client.start_panic_check(
            StartPanicCheckInput(
                site_id,
                s.credentials(),
                check_interval=interval,
                stop_on_event=stop_on_event,
                user_name=s.user_name or "",
            )
        ),
    )


@panic_app.command("result")
def panic_result(ctx: typer.Context, check_panic_id: str = typer.Argument(..., help="Identifier returned by 'panic start'.")) -> None:
    """Show the result of a panic-button check."""

    _run(ctx, lambda client, s: client.get_panic_check(GetPanicCheckInput(check_panic_id, s.credentials(), user_name=s.user_name or "")))


@myalarm_app.command("users")
def myalarm_users(ctx: typer.Context, site_id: str = typer.Argument(..., help="Site identifier.")) -> None:
    """List MyAlarm users of a site."""

    _run(ctx, lambda client, s: client.get_myalarm_users(GetMyAlarmUsersInput(site_id, s.credentials(), user_name=s.user_name or "")))


@myalarm_app.command("role")
def myalarm_role(
    ctx: typer.Context,
    customer_id: str = typer.Argument(..., help="MyAlarm user identifier."),
    role: str = typer.Argument(..., help="admin, user or unlink."),
) -> None:
    """Change a MyAlarm user's role."""

    _run(ctx, lambda client, s: client.change_user_role(ChangeUserRoleInput(customer_id, role, s.credentials(), user_name=s.user_name or "")))


@myalarm_app.command("panic")
def myalarm_panic(
    ctx: typer.Context,
    customer_id: str = typer.Argument(..., help="MyAlarm user identifier."),
    allow: bool = typer.Option(False, "--allow/--deny", help="Allow or forbid the panic button in the app (default: deny)."),
) -> None:
    """Allow or forbid panic-button use for a MyAlarm user."""

    _run(
        ctx,
        lambda client, s: client.change_panic_permission(ChangePanicPermissionInput(customer_id, allow, s.credentials(), user_name=s.user_name or "")),
    )


@myalarm_app.command("objects")
def myalarm_objects(ctx: typer.Context, phone: str = typer.Argument(..., help="Phone number in +7XXXXXXXXXX format.")) -> None:
    """List sites available to a MyAlarm user."""

    _run(ctx, lambda client, s: client.get_user_objects(GetUserObjectsInput(phone, s.credentials(), user_name=s.user_name or "")))


@app.command("parts")
def parts(ctx: typer.Context, site_id: str = typer.Argument(..., help="Site identifier.")) -> None:
    """List partitions of a site."""

    _run(ctx, lambda client, s: client.get_partitions(GetPartitionsInput(site_id, s.credentials(), user_name=s.user_name or "")))


@app.command("zones")
def zones(ctx: typer.Context, site_id: str = typer.Argument(..., help="Site identifier.")) -> None:
    """List zones of a site."""

    _run(ctx, lambda client, s: client.get_zones(GetZonesInput(site_id, s.credentials(), user_name=s.user_name or "")))


@app.command("verify")
def verify(
    ctx: typer.Context,
    site_id: Optional[str] = typer.Argument(None, help="Site to probe; defaults to the configured site_id."),
) -> None:
    """Check that the API is reachable with the configured credentials."""

    settings = _require_settings(ctx)

    async def _verify():
        async with build_client(settings) as client:
            adapter = AndromedaAdapter(
                client=client,
                credentials=settings.credentials(),
                site_id=site_id or settings.site_id,
                user_name=settings.user_name or "",
            )
            return await adapter.verify()

    result = anyio.run(_verify)
    typer.echo(result.message)
    if result.details:
        typer.echo(f"Details: {json.dumps(result.details, ensure_ascii=False)}")
    if not result.success:
        raise typer.Exit(code=1)


if __name__ == "__main__":  # pragma: no cover
    app()
