from __future__ import annotations

import logging
from typing import Any, Callable

import httpx
import pytest
from typer.testing import CliRunner

from andromeda_api.api import AndromedaClient, Credentials
from andromeda_api.cli.main import app


@pytest.fixture()
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture()
def credentials() -> Credentials:
    return Credentials(api_key="secret-key", host="https://andromeda.example.com/api")


@pytest.fixture()
def make_client() -> Callable[..., AndromedaClient]:
    def _factory(handler: Callable[[httpx.Request], Any], **kwargs: Any) -> AndromedaClient:
        return AndromedaClient(transport=httpx.MockTransport(handler), **kwargs)

    return _factory


@pytest.fixture()
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def cli_app():
    return app


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch, tmp_path):
    for variable in (
        "ANDROMEDA_HOST",
        "ANDROMEDA_API_KEY",
        "ANDROMEDA_USER_NAME",
        "ANDROMEDA_TIMEOUT",
        "ANDROMEDA_SITE_ID",
        "ANDROMEDA_SECRETS_PATH",
        "ANDROMEDA_LOG_LEVEL",
    ):
        monkeypatch.delenv(variable, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    logger = logging.getLogger("andromeda_api")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
