"""Request headers for the introspection endpoint.

The schema fetcher asks an Auth handler for the headers to send. The
command line builds a HeaderAuth from ``--header "Authorization=Bearer x,X-API-Key=abc"``.
"""

from typing import Dict, Protocol, runtime_checkable

from .scalars import split_multi_value_argument


@runtime_checkable
class Auth(Protocol):
    """Protocol for authentication handlers.

    Example:
        class MyCustomAuth:
            def __init__(self, token: str):
                self.token = token

            def get_headers(self) -> dict[str, str]:
                return {"Authorization": f"Bearer {self.token}"}
    """

    def get_headers(self) -> Dict[str, str]:
        """Return headers to include in requests."""
        ...


class HeaderAuth:
    """Custom headers authentication.

    Args:
        headers: Dictionary of headers to include

    Example:
        auth = HeaderAuth({"X-API-Key": "key123"})
        auth = HeaderAuth.from_argument("Authorization=Bearer eyJraWQ,X-API-Key=abc")
    """

    def __init__(self, headers: Dict[str, str]):
        self._headers = dict(headers)

    @classmethod
    def from_argument(cls, arg: str | None) -> "HeaderAuth":
        """Build from a ``"Key1=Val1,Key2=Val2"`` string; pairs without ``=`` are dropped."""
        return cls(split_multi_value_argument(arg))

    def get_headers(self) -> Dict[str, str]:
        return self._headers.copy()


class NoAuth:
    """No authentication (for public endpoints or testing)."""

    def get_headers(self) -> Dict[str, str]:
        return {}
