"""
Download Orchestration

Top-level operations that resolve versions, fetch artifacts into the
temporary workspace, install them into the project and clean up. Steps run
strictly one after another; a failing step aborts the operation and leaves
whatever was already installed in place.

The workspace (`.tmp` under the project directory) is shared by every
operation, so operations must not run concurrently in the same project.
"""

import os
from typing import List, Optional

from neufetch.config import ProjectConfig
from neufetch.constants import (
    BIN_DIR_NAME,
    BINARIES_ZIP_NAME,
    CLIENT_LIBRARY_PREFIX,
    CONFIG_KEY_CLIENT_LIBRARY,
    MSG_CLIENT_DOWNLOAD_SKIPPED,
    TEMP_DIR_NAME,
    TEMPLATE_BRANCH_SUFFIX,
    TEMPLATE_ZIP_NAME,
    TYPES_EXTENSION,
)
from neufetch.log_utils import logger
from neufetch.utils import ProxyConfig

from .fetcher import fetch
from .files import (
    clear_directory,
    copy_file,
    extract_archive,
    install_binaries,
    install_template,
    trim_path,
    types_path_for,
)
from .urls import (
    get_binary_download_url,
    get_client_download_url,
    get_repo_name_from_template,
    get_script_extension,
    get_template_url,
    get_types_download_url,
)
from .version import VersionResolver


def _workspace(project_dir: str) -> str:
    temp_dir = os.path.join(project_dir, TEMP_DIR_NAME)
    os.makedirs(temp_dir, exist_ok=True)
    return temp_dir


def download_template(
    template: str, proxy: ProxyConfig = None, project_dir: str = "."
) -> str:
    """
    Download a project template and copy its scaffold over the project directory.

    Parameters:
        template (str): GitHub `owner/repo` identifier; the `main` branch archive is used.
        proxy: Optional proxy configuration.
        project_dir (str): Directory receiving the scaffold.

    Returns:
        str: The project directory.
    """
    template_url = get_template_url(template)
    repo_name = get_repo_name_from_template(template)
    temp_dir = _workspace(project_dir)
    zip_filename = os.path.join(temp_dir, TEMPLATE_ZIP_NAME)

    logger.info(f"Downloading {template} template...")
    fetch(template_url, zip_filename, proxy)

    logger.info("Extracting template zip file...")
    extract_archive(zip_filename, temp_dir)
    install_template(
        os.path.join(temp_dir, f"{repo_name}{TEMPLATE_BRANCH_SUFFIX}"), project_dir
    )
    clear_directory(temp_dir)
    return project_dir


def download_and_update_binaries(
    latest: bool = False,
    proxy: ProxyConfig = None,
    project_dir: str = ".",
    config: Optional[ProjectConfig] = None,
    resolver: Optional[VersionResolver] = None,
) -> List[str]:
    """
    Download the framework binaries release and install it into `bin/`.

    Parameters:
        latest (bool): Resolve the newest release instead of the configured `cli.binaryVersion`.
        proxy: Optional proxy configuration.
        project_dir (str): Project root holding the configuration file and `bin/`.
        config (ProjectConfig | None): Configuration store; loaded from `project_dir` when omitted.
        resolver (VersionResolver | None): Resolver for this run; a fresh one is created when omitted.

    Returns:
        List[str]: The installed binary and dependency paths.
    """
    config = config or ProjectConfig(project_dir)
    resolver = resolver or VersionResolver(proxy)

    logger.info("Downloading Neutralinojs binaries...")
    url = get_binary_download_url(config, resolver, latest, proxy)
    temp_dir = _workspace(project_dir)
    zip_filename = os.path.join(temp_dir, BINARIES_ZIP_NAME)
    fetch(url, zip_filename, proxy)

    logger.info("Extracting binaries.zip file...")
    extract_archive(zip_filename, temp_dir)

    logger.info("Finalizing and cleaning temp. files.")
    installed = install_binaries(temp_dir, os.path.join(project_dir, BIN_DIR_NAME))
    clear_directory(temp_dir)
    return installed


def download_and_update_client(
    latest: bool = False,
    proxy: ProxyConfig = None,
    project_dir: str = ".",
    config: Optional[ProjectConfig] = None,
    resolver: Optional[VersionResolver] = None,
) -> List[str]:
    """
    Download the client library script and its type declarations.

    Does nothing when the project does not configure `cli.clientLibrary`; the
    client library is then expected to come from a Node package manager.

    Returns:
        List[str]: The installed script and types paths, or an empty list when skipped.
    """
    config = config or ProjectConfig(project_dir)
    configured_library = config.get_value(CONFIG_KEY_CLIENT_LIBRARY)
    if not configured_library:
        logger.info(MSG_CLIENT_DOWNLOAD_SKIPPED)
        return []

    resolver = resolver or VersionResolver(proxy)
    client_library = trim_path(configured_library)
    extension = get_script_extension(configured_library)
    temp_dir = _workspace(project_dir)
    script_file = os.path.join(temp_dir, f"{CLIENT_LIBRARY_PREFIX}{extension}")
    types_file = os.path.join(temp_dir, f"{CLIENT_LIBRARY_PREFIX}{TYPES_EXTENSION}")

    logger.info("Downloading the Neutralinojs client...")
    script_url = get_client_download_url(config, resolver, latest, proxy)
    fetch(script_url, script_file, proxy)

    logger.info("Downloading the Neutralinojs types...")
    types_url = get_types_download_url(config, resolver, latest, proxy)
    fetch(types_url, types_file, proxy)

    logger.info("Finalizing and cleaning temp. files...")
    installed = [
        copy_file(script_file, os.path.join(project_dir, client_library)),
        copy_file(
            types_file, os.path.join(project_dir, types_path_for(client_library))
        ),
    ]
    clear_directory(temp_dir)
    return installed


def update_project(
    latest: bool = False, proxy: ProxyConfig = None, project_dir: str = "."
) -> List[str]:
    """
    Refresh both the binaries and the client library of a project.

    One resolver is shared by both steps.

    Returns:
        List[str]: Every installed path.
    """
    config = ProjectConfig(project_dir)
    resolver = VersionResolver(proxy)
    installed = download_and_update_binaries(
        latest, proxy, project_dir, config=config, resolver=resolver
    )
    installed.extend(
        download_and_update_client(
            latest, proxy, project_dir, config=config, resolver=resolver
        )
    )
    return installed
