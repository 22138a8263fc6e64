from __future__ import annotations

"""backend/move_toolkit/services/tools/aptos.py

CommandSpec builders for the aptos CLI.

Every user-triggered action maps to exactly one builder here. Builders only
assemble argv; they never run anything and never look at the filesystem
(project root discovery lives in services.actions.workspace).
"""

from pathlib import Path
from typing import Callable, Dict

from move_toolkit.config import Settings
from move_toolkit.errors import InvalidNetworkError
from move_toolkit.models import Action, CommandSpec, Network

VALID_NETWORKS = [n.value for n in Network]


def parse_network(value: str | Network | None, settings: Settings | None = None) -> Network:
    """Validate a network name; None falls back to the configured default."""
    if value is None or (isinstance(value, str) and not value.strip()):
        if settings is None:
            raise InvalidNetworkError("", VALID_NETWORKS)
        return settings.default_network
    if isinstance(value, Network):
        return value
    try:
        return Network(value.strip().lower())
    except ValueError:
        raise InvalidNetworkError(value, VALID_NETWORKS) from None


def _spec(settings: Settings, args: list[str], workdir: Path | None) -> CommandSpec:
    return CommandSpec(
        executable=settings.aptos_path,
        args=tuple(args),
        workdir=workdir,
        timeout=settings.timeout_seconds,
    )


def build_command(settings: Settings, package_dir: Path) -> CommandSpec:
    return _spec(settings, ["move", "build", "--package-dir", str(package_dir)], package_dir)


def test_command(settings: Settings, package_dir: Path) -> CommandSpec:
    return _spec(settings, ["move", "test", "--package-dir", str(package_dir)], package_dir)


def publish_command(settings: Settings, package_dir: Path) -> CommandSpec:
    return _spec(settings, ["move", "publish", "--package-dir", str(package_dir)], package_dir)


def add_dependency_command(settings: Settings, package_dir: Path, dependency: str) -> CommandSpec:
    return _spec(
        settings,
        ["move", "add", "--package-dir", str(package_dir), dependency],
        package_dir,
    )


def init_project_command(settings: Settings, name: str, workdir: Path | None = None) -> CommandSpec:
    return _spec(settings, ["move", "init", "--name", name], workdir)


def account_list_command(settings: Settings, workdir: Path | None = None) -> CommandSpec:
    return _spec(settings, ["account", "list", "--output", settings.output_format], workdir)


def account_create_command(settings: Settings, workdir: Path | None = None) -> CommandSpec:
    return _spec(settings, ["init", "--profile", settings.profile], workdir)


def network_switch_command(
    settings: Settings,
    network: str | Network,
    workdir: Path | None = None,
) -> CommandSpec:
    net = parse_network(network)
    return _spec(
        settings,
        ["init", "--profile", settings.profile, "--network", net.value],
        workdir,
    )


def network_info_command(settings: Settings, workdir: Path | None = None) -> CommandSpec:
    return _spec(
        settings,
        ["node", "show-validator-set", "--output", settings.output_format],
        workdir,
    )


# Actions whose command takes the project root as --package-dir.
PROJECT_BUILDERS: Dict[Action, Callable[[Settings, Path], CommandSpec]] = {
    Action.BUILD: build_command,
    Action.TEST: test_command,
    Action.DEPLOY: publish_command,
}
