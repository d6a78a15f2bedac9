"""Schema script sources: local ``.sql`` files and HTTP(S) URLs.

Every loader returns ``(source, text)`` where ``source`` names where the
script came from, for log and error messages.
"""

from pathlib import Path
from urllib.parse import urlparse

import requests

from .logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 30


class SchemaSourceError(Exception):
    """A schema script could not be obtained."""

    pass


def load_schema_from_file(file_path: str | Path) -> tuple[str, str]:
    """Read a schema script from disk as UTF-8.

    Raises:
        FileNotFoundError: If the path does not exist.
        SchemaSourceError: If the file cannot be read or decoded.
    """
    path = Path(file_path)

    if not path.exists():
        logger.error(f"Schema file not found: {path}")
        raise FileNotFoundError(f"Schema file not found: {path}")

    if path.suffix.lower() != ".sql":
        logger.warning(f"Schema file {path} has no .sql extension, reading anyway")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Cannot read schema file {path}: {e}")
        raise SchemaSourceError(f"Cannot read schema file {path}: {e}") from e

    logger.info(f"Read {len(text)} characters of schema from {path}")
    return str(path), text


def load_schema_from_url(url: str, timeout: int = DEFAULT_TIMEOUT) -> tuple[str, str]:
    """Download a schema script.

    Raises:
        SchemaSourceError: For malformed URLs, timeouts, connection
            failures and non-2xx responses.
    """
    parts = urlparse(url)
    if not (parts.scheme and parts.netloc):
        raise SchemaSourceError(f"Invalid URL: {url}")

    logger.debug(f"Downloading schema from {url} (timeout {timeout}s)")
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.Timeout as e:
        raise SchemaSourceError(f"Timed out after {timeout}s fetching {url}") from e
    except requests.exceptions.ConnectionError as e:
        raise SchemaSourceError(f"Could not connect to {url}: {e}") from e
    except requests.exceptions.HTTPError as e:
        raise SchemaSourceError(
            f"{url} answered with HTTP {e.response.status_code}"
        ) from e
    except requests.exceptions.RequestException as e:
        raise SchemaSourceError(f"Fetching {url} failed: {e}") from e

    logger.info(f"Downloaded schema from {url}")
    return url, response.text


def load_schema_text(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = DEFAULT_TIMEOUT,
) -> tuple[str, str]:
    """Load a schema script from exactly one of ``file_path`` or ``url``."""
    if bool(file_path) == bool(url):
        raise SchemaSourceError("Give exactly one schema source: a file path or a URL")

    if file_path:
        return load_schema_from_file(file_path)
    return load_schema_from_url(url, timeout)
