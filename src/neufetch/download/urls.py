"""
Download URL construction.

Each artifact family renders its URL template from a version stored in the
project configuration. A stored version is reused as-is unless the caller
asks for the latest release, in which case a fresh version is resolved and
written back.
"""

from typing import Optional

from neufetch.config import ProjectConfig
from neufetch.constants import (
    BINARIES_URL,
    CLIENT_URL_PREFIX,
    CONFIG_KEY_BINARY_VERSION,
    CONFIG_KEY_CLIENT_LIBRARY,
    CONFIG_KEY_CLIENT_VERSION,
    DEFAULT_SCRIPT_EXTENSION,
    MODULE_SCRIPT_EXTENSION,
    TEMPLATE_URL,
    TYPES_EXTENSION,
)
from neufetch.exceptions import ValidationError
from neufetch.utils import ProxyConfig

from .version import VersionResolver, get_version_tag


def get_script_extension(client_library: Optional[str]) -> str:
    """
    Pick the client script extension matching the configured output path.

    Returns:
        "mjs" when the configured path is an ES module script, "js" otherwise.
    """
    if client_library and f".{MODULE_SCRIPT_EXTENSION}" in client_library:
        return MODULE_SCRIPT_EXTENSION
    return DEFAULT_SCRIPT_EXTENSION


def _render(template: str, version: str) -> str:
    return template.replace("{tag}", get_version_tag(version))


def get_binary_download_url(
    config: ProjectConfig,
    resolver: VersionResolver,
    latest: bool = False,
    proxy: ProxyConfig = None,
) -> str:
    """
    Build the platform binaries archive URL.

    Parameters:
        config: Project configuration holding `cli.binaryVersion`.
        resolver: Version resolver used when a lookup is needed.
        latest: Resolve the newest release even if a version is stored.
        proxy: Optional proxy configuration for the lookup.
    """
    version = config.get_value(CONFIG_KEY_BINARY_VERSION)

    if not version or latest:
        version = resolver.latest_binary_version(proxy)
        config.update(CONFIG_KEY_BINARY_VERSION, version)

    return _render(BINARIES_URL, version)


def get_client_download_url(
    config: ProjectConfig,
    resolver: VersionResolver,
    latest: bool = False,
    proxy: ProxyConfig = None,
    types: bool = False,
) -> str:
    """
    Build the client script URL, or the type declarations URL when `types` is set.

    The resolver memoizes the client version, so the script and types URLs of
    one operation always point at the same release.
    """
    version = config.get_value(CONFIG_KEY_CLIENT_VERSION)

    if not version or latest:
        version = resolver.latest_client_version(proxy)
        config.update(CONFIG_KEY_CLIENT_VERSION, version)

    if types:
        extension = TYPES_EXTENSION
    else:
        extension = get_script_extension(config.get_value(CONFIG_KEY_CLIENT_LIBRARY))
    return _render(CLIENT_URL_PREFIX + extension, version)


def get_types_download_url(
    config: ProjectConfig,
    resolver: VersionResolver,
    latest: bool = False,
    proxy: ProxyConfig = None,
) -> str:
    return get_client_download_url(config, resolver, latest, proxy, types=True)


def get_repo_name_from_template(template: str) -> str:
    """
    Return the repository part of an `owner/repo` template identifier.

    Raises:
        ValidationError: If the identifier is not of the form `owner/repo`.
    """
    parts = template.strip().split("/")
    if len(parts) != 2 or not all(parts):
        raise ValidationError(
            f"Invalid template '{template}'. Expected the form <owner>/<repository>",
            field="template",
            value=template,
        )
    return parts[1]


def get_template_url(template: str) -> str:
    get_repo_name_from_template(template)
    return TEMPLATE_URL.replace("{template}", template.strip())
