"""Locations of API documents and a caching loader for them."""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union
from urllib.parse import unquote, urldefrag, urljoin, urlparse
from urllib.request import url2pathname

import requests

from .errors import InvalidReferenceError, ResourceError
from .parser import DocumentParser, ParseResult

logger = logging.getLogger(__name__)

# A scheme needs at least two characters so Windows drive letters stay paths
_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]+:")


@dataclass(frozen=True)
class Location:
    """Absolute locator of a document plus an optional JSON Pointer fragment."""

    locator: str
    fragment: str = ""

    @classmethod
    def parse(cls, uri: str, base: Optional[str] = None) -> "Location":
        """
        Resolve a reference URI against a base locator.

        Args:
            uri: The ``$ref`` value, relative or absolute
            base: Absolute locator the reference is relative to

        Returns:
            Normalized absolute Location

        Raises:
            InvalidReferenceError: if the result is not an absolute URI with a
                JSON Pointer (or empty) fragment
        """
        if not isinstance(uri, str) or not uri.strip():
            raise InvalidReferenceError(f"Invalid $ref {uri!r}: expected a non-empty URI string")
        try:
            absolute = urljoin(base, uri) if base else uri
            locator, fragment = urldefrag(absolute)
            scheme = urlparse(locator).scheme
        except ValueError as e:
            raise InvalidReferenceError(f"Invalid $ref {uri!r}: {e}") from e

        if not scheme:
            raise InvalidReferenceError(f"Invalid $ref {uri!r}: cannot be made absolute")

        fragment = unquote(fragment)
        if fragment and not fragment.startswith("/"):
            raise InvalidReferenceError(f"Invalid $ref {uri!r}: fragment must be a JSON pointer")
        return cls(locator=locator, fragment=fragment)

    def with_fragment(self, fragment: str) -> "Location":
        return Location(self.locator, fragment)

    def __str__(self) -> str:
        if self.fragment:
            return f"{self.locator}#{self.fragment}"
        return self.locator


def to_root_location(uri_or_path: Union[str, Path]) -> Location:
    """
    Turn a command line style input into an absolute Location.

    Strings with a URL scheme are used as is; anything else is treated as a
    filesystem path relative to the working directory.
    """
    text = str(uri_or_path)
    if _SCHEME.match(text):
        return Location.parse(text)
    locator, fragment = urldefrag(text)
    uri = Path(locator).expanduser().resolve().as_uri()
    return Location.parse(f"{uri}#{fragment}" if fragment else uri)


class DocumentLoader:
    """Fetches and parses documents, each locator at most once per run."""

    def __init__(self, parser: DocumentParser = None, http_timeout: float = 30.0):
        self.parser = parser or DocumentParser()
        self.http_timeout = http_timeout
        self._cache: Dict[str, Any] = {}

    def register(self, locator: str, document: Any) -> None:
        """Seed the cache, e.g. with a root document parsed by the caller."""
        self._cache[locator] = document

    def is_cached(self, locator: str) -> bool:
        return locator in self._cache

    def load(self, location: Union[Location, str]) -> Any:
        """
        Return the parsed document for a location, fetching it if needed.

        Args:
            location: Location (its fragment is ignored) or locator string

        Returns:
            The cached document object; callers must copy before mutating a
            part of it they insert elsewhere

        Raises:
            ResourceError: if the document cannot be fetched or parsed
        """
        locator = location.locator if isinstance(location, Location) else location
        if locator in self._cache:
            return self._cache[locator]

        parts = urlparse(locator)
        if parts.scheme == "file":
            result = self.parser.parse_file(url2pathname(parts.path))
        elif parts.scheme in ("http", "https"):
            result = self._fetch(locator)
        else:
            raise ResourceError(locator, f"unsupported URL scheme '{parts.scheme}'")

        if not result.success:
            raise ResourceError(locator, result.error)

        logger.debug(f"Loaded {locator} ({result.file_type})")
        self._cache[locator] = result.data
        return result.data

    def _fetch(self, url: str) -> ParseResult:
        """GET a document over HTTP(S) and parse the body."""
        try:
            response = requests.get(url, timeout=self.http_timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise ResourceError(url, str(e)) from e

        content_type = response.headers.get("Content-Type", "")
        file_type = "json" if "json" in content_type else self.parser.get_file_type(urlparse(url).path)
        return self.parser.parse_text(response.text, file_type)
