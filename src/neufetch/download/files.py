"""
File Operations for neufetch Downloads

This module extracts downloaded archives and installs the selected files
into the project tree: platform binaries into `bin/`, template scaffolds
over the project root, and the client library next to the app sources.
"""

import os
import re
import shutil
import zipfile
from typing import Dict, Iterable, List, Mapping

from neufetch.constants import BINARY_FILES, DEPENDENCY_FILES, TYPES_EXTENSION
from neufetch.exceptions import ExtractionError, FileSystemError
from neufetch.log_utils import logger

FILE_EXTENSION_RX = re.compile(r"[.][a-z]*$")
LEADING_PATH_RX = re.compile(r"^(?:\.?/)+")


def trim_path(path: str) -> str:
    """
    Remove leading "./" and "/" segments so the path is relative to the project.

    Parameters:
        path (str): A path from the project configuration, e.g. "/resources/js/neutralino.js".

    Returns:
        str: The same path without its leading separators, e.g. "resources/js/neutralino.js".
    """
    return LEADING_PATH_RX.sub("", path)


def types_path_for(client_library: str) -> str:
    """Return the sibling type declarations path of a client library path."""
    return FILE_EXTENSION_RX.sub(f".{TYPES_EXTENSION}", client_library)


def _is_within_base(real_base_dir: str, candidate: str) -> bool:
    try:
        return os.path.commonpath([real_base_dir, candidate]) == real_base_dir
    except ValueError:
        return False


def safe_extract_path(extract_dir: str, file_path: str) -> str:
    """
    Resolve a safe absolute extraction path and prevent directory traversal.

    Parameters:
        extract_dir (str): Base directory intended for extraction.
        file_path (str): Member path from the archive to be extracted.

    Returns:
        str: Absolute, normalized path inside extract_dir suitable for extraction.

    Raises:
        ValueError: If the resolved path is outside extract_dir.
    """
    real_extract_dir = os.path.realpath(extract_dir)
    prospective_path = os.path.join(real_extract_dir, file_path)
    normalized_path = os.path.realpath(prospective_path)

    if not _is_within_base(real_extract_dir, normalized_path):
        raise ValueError(
            f"Unsafe extraction path '{file_path}' is outside base '{extract_dir}'"
        )

    return normalized_path


def extract_archive(zip_path: str, extract_dir: str) -> List[str]:
    """
    Extract every member of a ZIP archive into `extract_dir`.

    Members that would land outside `extract_dir` are skipped with a warning.
    Unix permission bits stored in the archive are restored so extracted
    binaries stay executable.

    Returns:
        List[str]: Paths of the extracted files.

    Raises:
        ExtractionError: If the archive is corrupt or cannot be written out.
    """
    extracted_files = []
    try:
        with zipfile.ZipFile(zip_path, "r") as zip_ref:
            for file_info in zip_ref.infolist():
                try:
                    extract_path = safe_extract_path(extract_dir, file_info.filename)
                except ValueError as e:
                    logger.warning(f"Skipping unsafe archive member: {e}")
                    continue

                if file_info.is_dir():
                    os.makedirs(extract_path, exist_ok=True)
                    continue

                os.makedirs(os.path.dirname(extract_path), exist_ok=True)
                with (
                    zip_ref.open(file_info) as source,
                    open(extract_path, "wb") as target,
                ):
                    shutil.copyfileobj(source, target)

                mode = (file_info.external_attr >> 16) & 0o777
                if mode and os.name != "nt":
                    os.chmod(extract_path, mode)

                extracted_files.append(extract_path)
    except zipfile.BadZipFile as e:
        raise ExtractionError(
            f"Corrupted archive {zip_path}", archive_path=zip_path, details=str(e)
        ) from e
    except OSError as e:
        raise ExtractionError(
            f"Error extracting archive {zip_path}",
            archive_path=zip_path,
            details=str(e),
        ) from e

    logger.debug(f"Extracted {len(extracted_files)} files from {zip_path}")
    return extracted_files


def copy_file(source: str, destination: str) -> str:
    """
    Copy a file, creating the destination's parent directories.

    Raises:
        FileSystemError: If the source is missing or the copy fails.
    """
    if not os.path.isfile(source):
        raise FileSystemError(f"Missing file {source}", path=source)
    try:
        parent_dir = os.path.dirname(destination)
        if parent_dir:
            os.makedirs(parent_dir, exist_ok=True)
        shutil.copy2(source, destination)
    except OSError as e:
        raise FileSystemError(
            f"Could not copy {source} to {destination}",
            path=destination,
            details=str(e),
        ) from e
    return destination


def install_binaries(
    source_dir: str,
    bin_dir: str,
    binaries: Mapping[str, Mapping[str, str]] = BINARY_FILES,
    dependencies: Iterable[str] = DEPENDENCY_FILES,
) -> List[str]:
    """
    Copy the manifest's binaries and shared dependencies into `bin_dir`.

    Every platform/architecture binary found in `source_dir` is copied under
    its manifest filename; binaries missing from the archive are skipped.
    Dependencies are required.

    Returns:
        List[str]: Installed file paths, in manifest order.

    Raises:
        FileSystemError: If a dependency file is missing or a copy fails.
    """
    os.makedirs(bin_dir, exist_ok=True)
    installed = []

    for platform_name, architectures in binaries.items():
        for arch, binary_file in architectures.items():
            source = os.path.join(source_dir, binary_file)
            if not os.path.isfile(source):
                logger.debug(f"No {platform_name}/{arch} binary in release archive")
                continue
            installed.append(copy_file(source, os.path.join(bin_dir, binary_file)))

    for dependency in dependencies:
        installed.append(
            copy_file(
                os.path.join(source_dir, dependency),
                os.path.join(bin_dir, dependency),
            )
        )

    return installed


def install_template(source_dir: str, project_dir: str) -> str:
    """
    Copy an extracted template tree over the project directory.

    Existing files with the same relative path are overwritten.

    Raises:
        FileSystemError: If the extracted template directory is missing or the copy fails.
    """
    if not os.path.isdir(source_dir):
        raise FileSystemError(
            f"Template directory {source_dir} not found in archive", path=source_dir
        )
    try:
        shutil.copytree(source_dir, project_dir, dirs_exist_ok=True)
    except (OSError, shutil.Error) as e:
        raise FileSystemError(
            f"Could not copy template into {project_dir}",
            path=project_dir,
            details=str(e),
        ) from e
    return project_dir


def clear_directory(path: str) -> None:
    """
    Remove a directory and everything under it; a missing directory is ignored.

    Raises:
        FileSystemError: If the directory exists but cannot be removed.
    """
    if not os.path.lexists(path):
        return
    try:
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        else:
            os.remove(path)
    except OSError as e:
        raise FileSystemError(
            f"Could not remove {path}", path=path, details=str(e)
        ) from e


def describe_manifest(
    binaries: Mapping[str, Mapping[str, str]] = BINARY_FILES,
) -> Dict[str, str]:
    """Flatten the binary manifest into "platform/arch" -> filename."""
    return {
        f"{platform_name}/{arch}": filename
        for platform_name, architectures in binaries.items()
        for arch, filename in architectures.items()
    }
