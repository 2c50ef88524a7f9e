# src/neufetch/utils.py
import importlib.metadata
from typing import Any, Dict, Mapping, Optional, Union

import requests

from neufetch.constants import APP_NAME, GITHUB_API_TIMEOUT
from neufetch.log_utils import logger

ProxyConfig = Union[str, Mapping[str, str], None]

# Cache for the User-Agent string to avoid repeated metadata lookups
_USER_AGENT_CACHE = None


def get_user_agent() -> str:
    """
    Get the User-Agent string used for HTTP requests.

    Returns:
        The string `neufetch/{version}`, where `{version}` is the installed package version or `unknown` if the version cannot be determined.
    """
    global _USER_AGENT_CACHE

    if _USER_AGENT_CACHE is None:
        try:
            app_version = importlib.metadata.version(APP_NAME)
        except importlib.metadata.PackageNotFoundError:
            app_version = "unknown"

        _USER_AGENT_CACHE = f"{APP_NAME}/{app_version}"

    return _USER_AGENT_CACHE


def build_proxies(proxy: ProxyConfig) -> Optional[Dict[str, str]]:
    """
    Translate a proxy setting into the mapping understood by requests.

    Parameters:
        proxy: None, a single proxy URL used for both schemes, or a scheme-to-URL mapping that is passed through unchanged.

    Returns:
        Optional[Dict[str, str]]: The proxies mapping, or None when no proxy is configured.
    """
    if not proxy:
        return None
    if isinstance(proxy, str):
        return {"http": proxy, "https": proxy}
    return dict(proxy)


def make_github_api_request(
    url: str,
    proxy: ProxyConfig = None,
    timeout: Optional[int] = None,
) -> requests.Response:
    """
    Perform a GitHub API GET request with the neufetch User-Agent.

    Parameters:
        url (str): GitHub API URL to request.
        proxy: Optional proxy configuration forwarded to requests.
        timeout (Optional[int]): Request timeout in seconds; the module default is used when omitted.

    Returns:
        requests.Response: The successful HTTP response.

    Raises:
        requests.HTTPError: For HTTP error responses.
        requests.RequestException: For lower-level network or request errors.
    """
    headers: Dict[str, Any] = {
        "Accept": "application/vnd.github+json",
        "User-Agent": get_user_agent(),
    }

    logger.debug(f"Making GitHub API request: {url}")
    response = requests.get(
        url,
        headers=headers,
        proxies=build_proxies(proxy),
        timeout=timeout or GITHUB_API_TIMEOUT,
    )
    response.raise_for_status()
    return response
