# src/neufetch/cli.py

import argparse
import importlib.metadata
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from neufetch import log_utils, settings
from neufetch.config import ProjectConfig
from neufetch.constants import (
    APP_NAME,
    BIN_DIR_NAME,
    CONFIG_KEY_BINARY_VERSION,
    CONFIG_KEY_CLIENT_LIBRARY,
    CONFIG_KEY_CLIENT_VERSION,
)
from neufetch.download import orchestrator
from neufetch.download.files import describe_manifest
from neufetch.download.version import VersionResolver, is_update_available
from neufetch.exceptions import NeufetchError, ValidationError

DEFAULT_TEMPLATE = "neutralinojs/neutralinojs-minimal"


def get_neufetch_version() -> str:
    try:
        return importlib.metadata.version(APP_NAME)
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def _load_settings() -> Dict[str, Any]:
    """
    Load user settings, logging and ignoring a broken settings file.

    Returns:
        dict: The settings mapping; empty when no usable file exists.
    """
    try:
        return settings.load_settings()
    except (OSError, yaml.YAMLError) as error:
        log_utils.logger.error(f"Failed to load settings: {error}")
        return {}


def _apply_logging_settings(
    args: argparse.Namespace, user_settings: Dict[str, Any]
) -> None:
    level_name = args.log_level or user_settings.get("LOG_LEVEL")
    if level_name:
        log_utils.set_log_level(level_name)
    if user_settings.get("LOG_TO_FILE"):
        log_utils.add_file_logging(
            Path(settings.get_log_dir()), level_name or "INFO"
        )


def _log_installed(paths: List[str]) -> None:
    for path in paths:
        log_utils.logger.info(f"Installed {path}")


def run_create(
    name: str, template: str, proxy: Optional[str], parent_dir: str
) -> str:
    """
    Create a new app directory from a template and install binaries and client.

    Returns:
        str: The new project directory.

    Raises:
        ValidationError: If the target directory already exists and is not empty.
    """
    project_dir = os.path.join(parent_dir, name)
    if os.path.isdir(project_dir) and os.listdir(project_dir):
        raise ValidationError(
            f"Directory {project_dir} already exists and is not empty",
            field="name",
            value=name,
        )
    os.makedirs(project_dir, exist_ok=True)

    log_utils.logger.info(f"Creating {name} from {template}...")
    orchestrator.download_template(template, proxy, project_dir)
    _log_installed(orchestrator.update_project(False, proxy, project_dir))
    log_utils.logger.info(f"Neutralinojs app {name} is ready in {project_dir}")
    return project_dir


def run_status(proxy: Optional[str], project_dir: str) -> None:
    """
    Log the configured versions, the latest releases and the installed binaries.
    """
    config = ProjectConfig(project_dir)
    resolver = VersionResolver(proxy)

    binary_version = config.get_value(CONFIG_KEY_BINARY_VERSION)
    client_version = config.get_value(CONFIG_KEY_CLIENT_VERSION)
    client_library = config.get_value(CONFIG_KEY_CLIENT_LIBRARY)

    latest_binary = resolver.latest_binary_version()
    log_utils.logger.info(
        f"Binaries: {binary_version or 'not set'} (latest: {latest_binary})"
    )
    if is_update_available(binary_version, latest_binary):
        log_utils.logger.info("A newer binaries release is available.")

    if client_library:
        latest_client = resolver.latest_client_version()
        log_utils.logger.info(
            f"Client library {client_library}: {client_version or 'not set'} "
            f"(latest: {latest_client})"
        )
        if is_update_available(client_version, latest_client):
            log_utils.logger.info("A newer client library release is available.")
    else:
        log_utils.logger.info("Client library: not managed by neufetch")

    bin_dir = os.path.join(project_dir, BIN_DIR_NAME)
    for target, filename in describe_manifest().items():
        installed = os.path.isfile(os.path.join(bin_dir, filename))
        state = "installed" if installed else "missing"
        log_utils.logger.info(f"  {target}: {filename} ({state})")


def run_settings(args: argparse.Namespace, user_settings: Dict[str, Any]) -> None:
    """
    Update the user settings file with any given options and log the result.
    """
    changes = {
        "PROXY": args.set_proxy,
        "LOG_LEVEL": args.set_log_level,
        "LOG_TO_FILE": args.log_to_file,
    }
    changes = {key: value for key, value in changes.items() if value is not None}
    if changes:
        user_settings = {**user_settings, **changes}
        path = settings.save_settings(user_settings)
        log_utils.logger.info(f"Settings saved to {path}")

    if not user_settings:
        log_utils.logger.info("No settings configured.")
    for key in settings.SETTINGS_KEYS:
        if key in user_settings:
            log_utils.logger.info(f"{key}: {user_settings[key]}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="neufetch - Neutralinojs binaries, client and template downloader",
    )
    parser.add_argument("--proxy", help="Proxy URL for all network requests")
    parser.add_argument("--log-level", help="Log level (DEBUG, INFO, WARNING, ...)")
    parser.add_argument(
        "--project-dir",
        default=".",
        help="Project directory containing neutralino.config.json",
    )
    subparsers = parser.add_subparsers(dest="command")

    create_parser = subparsers.add_parser(
        "create", help="Create a new app from a template"
    )
    create_parser.add_argument("name", help="Directory name of the new app")
    create_parser.add_argument(
        "--template",
        default=DEFAULT_TEMPLATE,
        help=f"Template repository as <owner>/<repo> (default: {DEFAULT_TEMPLATE})",
    )

    template_parser = subparsers.add_parser(
        "template", help="Copy a template over the project directory"
    )
    template_parser.add_argument(
        "template", help="Template repository as <owner>/<repo>"
    )

    for command, help_text in (
        ("binaries", "Download and install the framework binaries"),
        ("client", "Download and install the client library and its types"),
        ("update", "Update both binaries and client library"),
    ):
        command_parser = subparsers.add_parser(command, help=help_text)
        command_parser.add_argument(
            "--latest",
            action="store_true",
            help="Use the latest release instead of the configured version",
        )

    subparsers.add_parser(
        "status", help="Show configured and latest versions and installed binaries"
    )

    settings_parser = subparsers.add_parser(
        "settings", help="Show or change user settings"
    )
    settings_parser.add_argument("--set-proxy", help="Default proxy URL")
    settings_parser.add_argument("--set-log-level", help="Default log level")
    settings_parser.add_argument(
        "--log-to-file",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Write a rotating log file in the user log directory",
    )

    subparsers.add_parser("version", help="Display neufetch version")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """
    Entry point for the neufetch command-line interface.

    Parses arguments, applies user settings (command-line options win), and
    dispatches the subcommand. Application errors are logged and end the
    process with exit status 1.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    user_settings = _load_settings()
    _apply_logging_settings(args, user_settings)
    proxy = args.proxy or user_settings.get("PROXY")
    project_dir = args.project_dir

    try:
        if args.command == "create":
            run_create(args.name, args.template, proxy, project_dir)
        elif args.command == "template":
            orchestrator.download_template(args.template, proxy, project_dir)
            log_utils.logger.info(f"Template {args.template} copied to {project_dir}")
        elif args.command == "binaries":
            _log_installed(
                orchestrator.download_and_update_binaries(
                    args.latest, proxy, project_dir
                )
            )
        elif args.command == "client":
            _log_installed(
                orchestrator.download_and_update_client(args.latest, proxy, project_dir)
            )
        elif args.command == "update":
            _log_installed(orchestrator.update_project(args.latest, proxy, project_dir))
        elif args.command == "status":
            run_status(proxy, project_dir)
        elif args.command == "settings":
            run_settings(args, user_settings)
        elif args.command == "version":
            log_utils.logger.info(f"neufetch v{get_neufetch_version()}")
        else:
            parser.print_help()
    except NeufetchError as error:
        log_utils.logger.error(str(error))
        sys.exit(1)


if __name__ == "__main__":
    main()
