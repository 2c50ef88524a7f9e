"""
Streaming HTTP downloads.

Artifacts are fetched with a single GET that follows redirects (release
assets are served from a CDN behind a redirect) and written to disk chunk by
chunk. There is no retry and no overall timeout.
"""

import os
import time

import requests

from neufetch.constants import DEFAULT_CHUNK_SIZE
from neufetch.exceptions import FileSystemError, HTTPError, NetworkError
from neufetch.log_utils import logger
from neufetch.utils import ProxyConfig, build_proxies, get_user_agent


def _remove_partial(path: str) -> None:
    if os.path.exists(path):
        try:
            os.remove(path)
        except OSError as e:
            logger.debug(f"Could not remove partial download {path}: {e}")


def fetch(url: str, destination: str, proxy: ProxyConfig = None) -> str:
    """
    Download `url` into the file at `destination`.

    Parameters:
        url (str): HTTP(S) URL of the artifact.
        destination (str): File to write; its parent directory is created when missing.
        proxy: Optional proxy configuration forwarded to requests.

    Returns:
        str: The destination path once the file has been fully written.

    Raises:
        HTTPError: If the final response after redirects has an error status.
        NetworkError: For connection, proxy, TLS or stream failures.
        FileSystemError: If the destination cannot be written.
    """
    logger.debug(f"Downloading {url} to {destination}")
    start_time = time.time()

    parent_dir = os.path.dirname(destination)
    if parent_dir:
        os.makedirs(parent_dir, exist_ok=True)

    downloaded_bytes = 0
    try:
        with requests.get(
            url,
            headers={"User-Agent": get_user_agent()},
            proxies=build_proxies(proxy),
            stream=True,
            allow_redirects=True,
        ) as response:
            logger.debug(
                f"Received HTTP response status code: {response.status_code} for URL: {url}"
            )
            response.raise_for_status()

            with open(destination, "wb") as file:
                for chunk in response.iter_content(chunk_size=DEFAULT_CHUNK_SIZE):
                    if chunk:
                        file.write(chunk)
                        downloaded_bytes += len(chunk)
    except requests.HTTPError as e:
        _remove_partial(destination)
        status_code = e.response.status_code if e.response is not None else None
        raise HTTPError(
            f"Download failed with HTTP status {status_code}",
            status_code=status_code,
            url=url,
        ) from e
    except requests.RequestException as e:
        _remove_partial(destination)
        raise NetworkError(f"Download failed for {url}", url=url, details=str(e)) from e
    except OSError as e:
        _remove_partial(destination)
        raise FileSystemError(
            f"Could not write {destination}", path=destination, details=str(e)
        ) from e

    elapsed = time.time() - start_time
    logger.debug(
        f"Finished downloading {url}: {downloaded_bytes} bytes in {elapsed:.2f}s"
    )
    return destination
