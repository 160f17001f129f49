"""Utility functions for loading entity descriptions and config files.

This module provides functions for loading JSON, XML and YAML documents
from files and URLs with proper error handling, and for expanding the
input file patterns of the command line.
"""

import glob
import json
import os
import xml.etree.ElementTree as ET
from collections.abc import Hashable
from pathlib import Path
from typing import Any, Iterable, List
from urllib.parse import urlparse

import requests
import yaml

from .logging_config import get_logger

logger = get_logger(__name__)

# Root element of XML entity and config files
XML_ROOT_ELEMENT = "entity_baker"

FORMAT_JSON = "json"
FORMAT_XML = "xml"
FORMAT_YAML = "yaml"


class EntityFileError(Exception):
    """Custom exception for entity and config file loading errors."""

    pass


class StringKeyLoader(yaml.SafeLoader):
    """
    Safe YAML loader that keeps scalar mapping keys as strings.

    Keys like `null`, `on` or `yes` name columns and flags, so they must
    not turn into None or booleans; JSON and XML deliver them as text too.
    """

    def construct_mapping(self, node, deep=False):
        if not isinstance(node, yaml.MappingNode):
            raise yaml.constructor.ConstructorError(
                None, None, f"expected a mapping node, but found {node.id}", node.start_mark
            )
        self.flatten_mapping(node)

        mapping = {}
        for key_node, value_node in node.value:
            if isinstance(key_node, yaml.ScalarNode):
                key = self.construct_scalar(key_node)
            else:
                key = self.construct_object(key_node, deep=deep)
                if not isinstance(key, Hashable):
                    raise yaml.constructor.ConstructorError(
                        "while constructing a mapping", node.start_mark,
                        "found unhashable key", key_node.start_mark,
                    )
            mapping[key] = self.construct_object(value_node, deep=deep)
        return mapping


def is_url(source: str) -> bool:
    parsed = urlparse(str(source))
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def detect_format(name: str) -> str:
    """Detect the document format from a file name or URL path."""
    suffix = Path(urlparse(str(name)).path if is_url(name) else str(name)).suffix.lower()
    if suffix == ".xml":
        return FORMAT_XML
    if suffix in (".yaml", ".yml"):
        return FORMAT_YAML
    return FORMAT_JSON


def xml_element_to_value(element: ET.Element) -> Any:
    """
    Convert an XML element to plain data.

    Leaf elements become their stripped text. Elements with children or
    attributes become dicts; repeated child tags become lists and text
    next to children is kept under '_'.
    """
    children = list(element)
    text = (element.text or "").strip()

    if not children and not element.attrib:
        return text

    result: dict = dict(element.attrib)
    for child in children:
        value = xml_element_to_value(child)
        if child.tag in result:
            existing = result[child.tag]
            if not isinstance(existing, list):
                result[child.tag] = existing = [existing]
            existing.append(value)
        else:
            result[child.tag] = value

    if text:
        result["_"] = text
    return result


def parse_document(text: str, fmt: str, source: str = "<string>") -> Any:
    """Parse a JSON, XML or YAML document.

    Args:
        text: Document content.
        fmt: One of 'json', 'xml', 'yaml'.
        source: Description of the source for error messages.

    Returns:
        Parsed data.

    Raises:
        EntityFileError: If the document is invalid.
    """
    if fmt == FORMAT_XML:
        try:
            root = ET.fromstring(text)
        except ET.ParseError as e:
            raise EntityFileError(f"Invalid XML in {source}: {e}") from e
        if root.tag != XML_ROOT_ELEMENT:
            raise EntityFileError(
                f"Root element of {source} must be <{XML_ROOT_ELEMENT}>, not <{root.tag}>"
            )
        value = xml_element_to_value(root)
        return value if isinstance(value, dict) else {}

    if fmt == FORMAT_YAML:
        try:
            return yaml.load(text, Loader=StringKeyLoader)
        except yaml.YAMLError as e:
            raise EntityFileError(f"Invalid YAML in {source}: {e}") from e

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise EntityFileError(f"Invalid JSON in {source}: {e}") from e


def load_document(file_path: str | Path) -> Any:
    """Load a JSON, XML or YAML document from a local file.

    Raises:
        EntityFileError: If the file cannot be read or parsed.
    """
    file_path = Path(file_path)
    logger.debug(f"Loading {file_path}")

    if not file_path.is_file():
        raise EntityFileError(f"File not found: {file_path}")

    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}", exc_info=True)
        raise EntityFileError(f"Error reading file {file_path}: {e}") from e

    return parse_document(text, detect_format(file_path.name), str(file_path))


def load_entity_file_from_url(url: str, timeout: int = 30) -> tuple[str, Any]:
    """Load an entity description from a URL.

    Args:
        url: URL to fetch the document from.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (source description, parsed data).

    Raises:
        EntityFileError: If URL is invalid, request fails, or response is invalid.
    """
    logger.debug(f"Attempting to load entities from URL: {url}")

    if not is_url(url):
        logger.error(f"Invalid URL format: {url}")
        raise EntityFileError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.Timeout as e:
        logger.error(f"Request timeout for URL: {url}")
        raise EntityFileError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error(f"Connection error for URL {url}: {e}")
        raise EntityFileError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        logger.error(f"HTTP error {e.response.status_code} for URL: {url}")
        raise EntityFileError(f"HTTP error {e.response.status_code} for URL: {url}") from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Request error for URL {url}: {e}", exc_info=True)
        raise EntityFileError(f"Request error for URL {url}: {e}") from e

    fmt = detect_format(url)
    content_type = response.headers.get("content-type", "").lower()
    if "xml" in content_type:
        fmt = FORMAT_XML
    elif "yaml" in content_type:
        fmt = FORMAT_YAML

    data = parse_document(response.text, fmt, url)
    logger.info(f"Loaded entities from {url}")
    return url, data


def load_entity_file(source: str | Path, timeout: int = 30) -> tuple[str, Any]:
    """Load an entity description from a file or URL.

    Args:
        source: Local path or http(s) URL.
        timeout: Request timeout in seconds (only used for URLs).

    Returns:
        Tuple of (source description, parsed data).

    Raises:
        EntityFileError: If loading fails.
    """
    if is_url(str(source)):
        return load_entity_file_from_url(str(source), timeout)

    data = load_document(source)
    logger.info(f"Loaded entities from {source}")
    return str(source), data


def _case_insensitive_pattern(pattern: str) -> str:
    """Turn every letter outside of [...] classes into a [xX] class."""
    result = []
    in_class = False
    for char in pattern:
        if in_class:
            result.append(char)
            if char == "]":
                in_class = False
        elif char == "[":
            in_class = True
            result.append(char)
        elif char.isalpha():
            result.append(f"[{char.lower()}{char.upper()}]")
        else:
            result.append(char)
    return "".join(result)


def _input_sort_key(path: Path) -> tuple:
    directory = str(path.parent)
    return (len(directory), directory.lower(), path.name.lower())


def expand_input_files(patterns: Iterable[str], cwd: str | Path) -> List[str]:
    """Expand input file patterns.

    Local patterns are matched case-insensitively relative to cwd; matches
    are distinct and sorted by directory depth, directory and file name.
    URLs are passed through after the local files.

    Returns:
        List of absolute file paths and URLs.
    """
    cwd = Path(cwd)
    files: List[Path] = []
    urls: List[str] = []

    for pattern in patterns:
        pattern = str(pattern).strip()
        if not pattern:
            continue

        if is_url(pattern):
            if pattern not in urls:
                urls.append(pattern)
            continue

        full_pattern = _case_insensitive_pattern(pattern)
        if not Path(pattern).is_absolute():
            # The working directory is a literal path, only the pattern is matched
            full_pattern = os.path.join(glob.escape(str(cwd)), full_pattern)
        matches = glob.glob(full_pattern, recursive=True)
        if not matches:
            logger.warning(f"No files match '{pattern}'")

        for match in matches:
            path = Path(match).resolve()
            if path.is_file() and path not in files:
                files.append(path)

    files.sort(key=_input_sort_key)
    return [str(f) for f in files] + urls
