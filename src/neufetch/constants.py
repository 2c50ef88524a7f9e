"""
Constants and configuration values for neufetch.

This module contains the remote URL templates, the binary manifest, file and
directory names, timeouts, and logging settings used throughout the
application.
"""

# GitHub release URLs
GITHUB_API_BASE = "https://api.github.com/repos"
RELEASES_API_URL = f"{GITHUB_API_BASE}/neutralinojs/{{repo}}/releases/latest"
BINARIES_URL = (
    "https://github.com/neutralinojs/neutralinojs/releases/download/"
    "{tag}/neutralinojs-{tag}.zip"
)
CLIENT_URL_PREFIX = (
    "https://github.com/neutralinojs/neutralino.js/releases/download/"
    "{tag}/neutralino."
)
TEMPLATE_URL = "https://github.com/{template}/archive/main.zip"

# Upstream repositories queried for the latest release
BINARIES_REPO = "neutralinojs"
CLIENT_REPO = "neutralino.js"

# Fallback release channel when the latest tag cannot be resolved
NIGHTLY_VERSION = "nightly"
VERSION_TAG_PREFIX = "v"

# Network timeouts (in seconds)
GITHUB_API_TIMEOUT = 10
DEFAULT_CHUNK_SIZE = 8192

# Binary manifest: platform -> architecture -> filename inside the release zip
BINARY_FILES = {
    "linux": {
        "x64": "neutralino-linux_x64",
        "armhf": "neutralino-linux_armhf",
        "arm64": "neutralino-linux_arm64",
    },
    "darwin": {
        "x64": "neutralino-mac_x64",
        "arm64": "neutralino-mac_arm64",
        "universal": "neutralino-mac_universal",
    },
    "win32": {
        "x64": "neutralino-win_x64.exe",
    },
}

# Shared files every platform build needs next to the binaries
DEPENDENCY_FILES = ("WebView2Loader.dll",)

# Client library naming
CLIENT_LIBRARY_PREFIX = "neutralino."
TYPES_EXTENSION = "d.ts"
MODULE_SCRIPT_EXTENSION = "mjs"
DEFAULT_SCRIPT_EXTENSION = "js"

# File and directory names
TEMP_DIR_NAME = ".tmp"
BIN_DIR_NAME = "bin"
BINARIES_ZIP_NAME = "binaries.zip"
TEMPLATE_ZIP_NAME = "template.zip"
TEMPLATE_BRANCH_SUFFIX = "-main"
PROJECT_CONFIG_FILE_NAME = "neutralino.config.json"
SETTINGS_FILE_NAME = "neufetch.yaml"
APP_NAME = "neufetch"

# Project configuration keys
CONFIG_KEY_BINARY_VERSION = "cli.binaryVersion"
CONFIG_KEY_CLIENT_VERSION = "cli.clientVersion"
CONFIG_KEY_CLIENT_LIBRARY = "cli.clientLibrary"

# Log and user-facing messages
MSG_NIGHTLY_FALLBACK = (
    "Unable to fetch the latest version tag from GitHub. Using nightly releases..."
)
MSG_CLIENT_DOWNLOAD_SKIPPED = (
    "neufetch won't download the client library -- "
    "download @neutralinojs/lib from your Node package manager."
)

# Logging configuration
LOGGER_NAME = "neufetch"
LOG_FILE_NAME = "neufetch.log"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
INFO_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DEBUG_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s: %(message)s"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
LOG_FILE_BACKUP_COUNT = 5

# Environment variable names
LOG_LEVEL_ENV_VAR = "NEUFETCH_LOG_LEVEL"
