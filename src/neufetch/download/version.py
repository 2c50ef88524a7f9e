"""
Release Version Resolution

This module looks up the latest release tag of an upstream repository and
normalizes it into the version strings stored in the project configuration.
Network problems and any status other than 200 degrade to the nightly
channel.
"""

import json
import re
from typing import Optional

import requests
from packaging.version import InvalidVersion
from packaging.version import parse as parse_version

from neufetch.constants import (
    BINARIES_REPO,
    CLIENT_REPO,
    MSG_NIGHTLY_FALLBACK,
    NIGHTLY_VERSION,
    RELEASES_API_URL,
    VERSION_TAG_PREFIX,
)
from neufetch.exceptions import ReleaseLookupError
from neufetch.log_utils import logger
from neufetch.utils import ProxyConfig, make_github_api_request

TAG_PREFIX_RX = re.compile(r"^[^0-9]+")


def normalize_tag(tag: str) -> str:
    """
    Strip a leading non-numeric prefix from a release tag.

    Args:
        tag: Release tag such as "v5.2.0".

    Returns:
        The bare version, e.g. "5.2.0".
    """
    return TAG_PREFIX_RX.sub("", tag.strip())


def get_version_tag(version: str) -> str:
    """
    Map a stored version to the tag used in download URLs.

    "nightly" is a tag on its own; every other version gets a "v" prefix.
    """
    if version == NIGHTLY_VERSION:
        return version
    return f"{VERSION_TAG_PREFIX}{version}"


def _fallback() -> str:
    logger.warning(MSG_NIGHTLY_FALLBACK)
    return NIGHTLY_VERSION


def resolve_latest_version(repo: str, proxy: ProxyConfig = None) -> str:
    """
    Find the latest release version of an upstream repository.

    Args:
        repo: Repository name under the neutralinojs organization.
        proxy: Optional proxy configuration forwarded to the HTTP client.

    Returns:
        The latest version without its tag prefix, or "nightly" when the
        releases API is unreachable, answers with any status other than 200, or
        returns a document without a usable `tag_name`.

    Raises:
        ReleaseLookupError: If the releases API answers 200 with a body that is not JSON.
    """
    url = RELEASES_API_URL.replace("{repo}", repo)
    try:
        response = make_github_api_request(url, proxy=proxy)
        body = response.text
    except requests.RequestException as e:
        logger.debug(f"Release lookup for {repo} failed: {e}")
        return _fallback()

    if response.status_code != 200:
        logger.debug(
            f"Release lookup for {repo} answered HTTP {response.status_code}"
        )
        return _fallback()

    try:
        release = json.loads(body)
    except ValueError as e:
        raise ReleaseLookupError(
            f"Invalid release metadata for {repo}",
            endpoint=url,
            status_code=response.status_code,
            details=str(e),
        ) from e

    tag_name = release.get("tag_name") if isinstance(release, dict) else None
    if not isinstance(tag_name, str) or not normalize_tag(tag_name):
        logger.debug(f"Release metadata for {repo} has no usable tag_name")
        return _fallback()

    version = normalize_tag(tag_name)
    logger.info(
        f"Found the latest release tag {get_version_tag(version)} for {repo}..."
    )
    return version


def is_update_available(current: Optional[str], latest: Optional[str]) -> bool:
    """
    Determine whether `latest` is a newer release than `current`.

    Nightly and unparsable versions never count as an available update.
    """
    if not current or not latest:
        return False
    if NIGHTLY_VERSION in (current, latest):
        return False
    try:
        return parse_version(normalize_tag(latest)) > parse_version(
            normalize_tag(current)
        )
    except InvalidVersion:
        return False


class VersionResolver:
    """
    Resolves latest versions for one run of the tool.

    The client library is downloaded as two artifacts (script and types);
    the resolver remembers the client version after the first lookup so the
    second artifact does not query the API again. Use a fresh resolver per
    top-level operation.
    """

    def __init__(self, proxy: ProxyConfig = None):
        self.proxy = proxy
        self.cached_client_version: Optional[str] = None

    def latest_binary_version(self, proxy: ProxyConfig = None) -> str:
        return resolve_latest_version(BINARIES_REPO, proxy or self.proxy)

    def latest_client_version(self, proxy: ProxyConfig = None) -> str:
        if self.cached_client_version is None:
            self.cached_client_version = resolve_latest_version(
                CLIENT_REPO, proxy or self.proxy
            )
        return self.cached_client_version
