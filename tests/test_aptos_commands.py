from __future__ import annotations

from pathlib import Path

import pytest

from move_toolkit.config import Settings
from move_toolkit.errors import InvalidNetworkError
from move_toolkit.models import Network
from move_toolkit.services.tools import aptos


def test_project_commands(settings: Settings) -> None:
    root = Path("/work/pkg")
    assert aptos.build_command(settings, root).argv == [
        "aptos", "move", "build", "--package-dir", "/work/pkg",
    ]
    assert aptos.test_command(settings, root).argv == [
        "aptos", "move", "test", "--package-dir", "/work/pkg",
    ]
    assert aptos.publish_command(settings, root).argv == [
        "aptos", "move", "publish", "--package-dir", "/work/pkg",
    ]
    spec = aptos.add_dependency_command(settings, root, "0x1::coin")
    assert spec.argv == ["aptos", "move", "add", "--package-dir", "/work/pkg", "0x1::coin"]
    assert spec.workdir == root
    assert spec.timeout == settings.timeout_seconds


def test_account_and_network_commands(settings: Settings) -> None:
    assert aptos.account_list_command(settings).argv == [
        "aptos", "account", "list", "--output", "json",
    ]
    assert aptos.account_create_command(settings).argv == [
        "aptos", "init", "--profile", "default",
    ]
    assert aptos.network_switch_command(settings, "testnet").argv == [
        "aptos", "init", "--profile", "default", "--network", "testnet",
    ]
    assert aptos.network_info_command(settings).argv == [
        "aptos", "node", "show-validator-set", "--output", "json",
    ]
    assert aptos.init_project_command(settings, "hello").argv == [
        "aptos", "move", "init", "--name", "hello",
    ]


def test_custom_cli_path() -> None:
    settings = Settings(_env_file=None, aptos_path="/opt/aptos/bin/aptos")
    assert aptos.build_command(settings, Path("/p")).executable == "/opt/aptos/bin/aptos"


@pytest.mark.parametrize("value", ["local", "devnet", "testnet", "mainnet", " MainNet "])
def test_parse_network_accepts_known_networks(value: str) -> None:
    assert aptos.parse_network(value).value == value.strip().lower()


@pytest.mark.parametrize("value", ["moonnet", "dev net", "prod"])
def test_parse_network_rejects_unknown(value: str) -> None:
    with pytest.raises(InvalidNetworkError) as info:
        aptos.parse_network(value)
    assert info.value.valid == ["local", "devnet", "testnet", "mainnet"]


def test_parse_network_defaults_from_settings(settings: Settings) -> None:
    assert aptos.parse_network(None, settings) is Network.DEVNET
    with pytest.raises(InvalidNetworkError):
        aptos.parse_network(None)


def test_network_switch_rejects_unknown_network(settings: Settings) -> None:
    with pytest.raises(InvalidNetworkError):
        aptos.network_switch_command(settings, "moonnet")
