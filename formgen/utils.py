"""Utility functions for loading form configurations.

This module provides functions for loading JSON from files and URLs with
proper error handling, and for turning the result into a form descriptor.
"""

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import requests

from .descriptor import FormDescriptor, parse_form
from .logging_config import get_logger

logger = get_logger(__name__)


class JSONLoaderError(Exception):
    """Custom exception for JSON loading errors."""

    pass


def load_json_from_file(file_path: str | Path) -> tuple[str, Any]:
    """Load JSON data from a local file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        FileNotFoundError: If file doesn't exist.
        JSONLoaderError: If file cannot be read or JSON is invalid.
    """
    file_path = Path(file_path)
    logger.debug("Loading form configuration from file: %s", file_path)

    if not file_path.exists():
        logger.error("File not found: %s", file_path)
        raise FileNotFoundError(f"File not found: {file_path}")

    if file_path.suffix.lower() != ".json":
        logger.warning("File does not have .json extension: %s", file_path)

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in file %s: %s", file_path, e)
        raise JSONLoaderError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        logger.error("Error reading file %s: %s", file_path, e)
        raise JSONLoaderError(f"Error reading file {file_path}: {e}") from e

    logger.info("Loaded JSON from %s", file_path)
    return str(file_path), data


def load_json_from_url(url: str, timeout: int = 30) -> tuple[str, Any]:
    """Load JSON data from a URL.

    Raises:
        JSONLoaderError: If URL is invalid, request fails, or response isn't valid JSON.
    """
    logger.debug("Loading form configuration from URL: %s", url)

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        raise JSONLoaderError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()

        content_type = response.headers.get("content-type", "").lower()
        if "application/json" not in content_type and not url.endswith(".json"):
            logger.warning("URL %s does not have JSON content type: %s", url, content_type)

        data = response.json()
    except requests.exceptions.JSONDecodeError as e:
        raise JSONLoaderError(f"Invalid JSON response from URL {url}: {e}") from e
    except requests.exceptions.Timeout as e:
        raise JSONLoaderError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        raise JSONLoaderError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        raise JSONLoaderError(f"HTTP error {e.response.status_code} for URL: {url}") from e
    except requests.exceptions.RequestException as e:
        raise JSONLoaderError(f"Request error for URL {url}: {e}") from e

    logger.info("Loaded JSON from %s", url)
    return url, data


def is_url(source: str) -> bool:
    return urlparse(source).scheme in ("http", "https")


def load_json(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = 30,
) -> tuple[str, Any]:
    """Load JSON data from either a file or URL.

    Args:
        file_path: Path to local JSON file (mutually exclusive with url).
        url: URL to fetch JSON from (mutually exclusive with file_path).
        timeout: Request timeout in seconds (only used for URLs).

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        JSONLoaderError: If neither or both parameters are provided, or loading fails.
        FileNotFoundError: If file doesn't exist.
    """
    if not file_path and not url:
        raise JSONLoaderError("Either file_path or url must be provided")

    if file_path and url:
        raise JSONLoaderError("Cannot specify both file_path and url")

    if file_path:
        return load_json_from_file(file_path)
    return load_json_from_url(url, timeout)


def load_source(source: str | Path, timeout: int = 30) -> tuple[str, Any]:
    """Load JSON from a path or an http(s) URL."""
    if isinstance(source, str) and is_url(source):
        return load_json(url=source, timeout=timeout)
    return load_json(file_path=source)


def load_form(source: str | Path, strict: bool = True) -> FormDescriptor:
    """Load a form configuration from a file or URL and parse it.

    Raises:
        JSONLoaderError: If the document cannot be loaded.
        FileNotFoundError: If a file source doesn't exist.
        StructuralError: If the document is not a valid form configuration.
    """
    _, data = load_source(source)
    return parse_form(data, strict=strict)
