"""Loading schema text from a local file or a GraphQL endpoint.

Endpoints are asked for their schema with the standard IntrospectionQuery;
local files are read as-is and treated as introspection JSON when they end
in ``.json``.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

import httpx
from graphql import get_introspection_query

from .auth import Auth, NoAuth
from .errors import AcquisitionError

logger = logging.getLogger(__name__)

INTROSPECTION_OPERATION = "IntrospectionQuery"


@dataclass
class SchemaSource:
    """Raw schema text and the format it is in."""
    text: str
    is_introspection: bool
    origin: str


def is_endpoint(source: str) -> bool:
    """Check if the source is an absolute http(s) URL."""
    parsed = urlparse(source)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


class SchemaFetcher:
    """Fetches introspection results from a GraphQL endpoint.

    Examples:
        fetcher = SchemaFetcher(auth=HeaderAuth({"X-API-Key": "abc"}))
        text = fetcher.fetch("https://api.example.com/graphql")

        # Tests can inject a transport
        fetcher = SchemaFetcher(transport=httpx.MockTransport(handler))
    """

    def __init__(
        self,
        auth: Auth | None = None,
        *,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the fetcher.

        Args:
            auth: Header provider (implements Auth protocol)
            timeout: Request timeout in seconds
            transport: Optional httpx transport, mainly for tests
        """
        self._auth = auth or NoAuth()
        self.timeout = timeout
        self._transport = transport

    def fetch(self, url: str) -> str:
        """POST the IntrospectionQuery and return the raw response body.

        Raises:
            AcquisitionError: On network failure or a non-2xx response
        """
        payload = {
            "query": get_introspection_query(),
            "operationName": INTROSPECTION_OPERATION,
        }
        headers = {"Content-Type": "application/json"}
        headers.update(self._auth.get_headers())

        logger.debug("Fetching introspection from %s", url)
        try:
            with httpx.Client(
                timeout=self.timeout, headers=headers, transport=self._transport
            ) as client:
                response = client.post(url, json=payload)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise AcquisitionError(
                url, f"endpoint returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise AcquisitionError(url, str(e) or type(e).__name__) from e

        return response.text


def read_schema_file(path: str) -> SchemaSource:
    """Read a local schema file; ``.json`` files are introspection results.

    Raises:
        AcquisitionError: If the file is missing, unreadable or not UTF-8
    """
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise AcquisitionError(path, e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise AcquisitionError(path, "not valid UTF-8 text") from e
    return SchemaSource(
        text=text,
        is_introspection=file_path.suffix.lower() == ".json",
        origin=path,
    )


def load_schema_source(
    source: str,
    auth: Auth | None = None,
    *,
    timeout: float = 30.0,
    transport: httpx.BaseTransport | None = None,
) -> SchemaSource:
    """Load schema text from a URL (via introspection) or a local file."""
    if is_endpoint(source):
        fetcher = SchemaFetcher(auth, timeout=timeout, transport=transport)
        return SchemaSource(text=fetcher.fetch(source), is_introspection=True, origin=source)
    return read_schema_file(source)
