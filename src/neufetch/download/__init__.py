"""
neufetch Download Subsystem

Fetches Neutralinojs release artifacts and installs them into a project.

Core Components:
- version: latest release lookup with nightly fallback
- urls: download URL construction and version reuse
- fetcher: streaming HTTP downloads
- files: archive extraction and installation into the project tree
- orchestrator: the top-level download operations
"""

from .orchestrator import (
    download_and_update_binaries,
    download_and_update_client,
    download_template,
    update_project,
)
from .version import VersionResolver, resolve_latest_version

__all__ = [
    # Orchestration
    "download_template",
    "download_and_update_binaries",
    "download_and_update_client",
    "update_project",
    # Version resolution
    "VersionResolver",
    "resolve_latest_version",
]
