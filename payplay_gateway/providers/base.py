"""
Transport capability consumed by the gateway client.

The client never talks to an HTTP stack directly. It hands a fully signed
request to a transport and gets the raw response body back as text:

    transport(method, url, body, headers) -> str

``headers`` is an ordered list of ``"Name: value"`` strings and ``body`` is the
exact JSON text that was signed ("" when there is none). Any callable with
that shape works; the ABC below is for implementations that want to be
explicit about it.
"""

from abc import ABC, abstractmethod
from typing import Callable

TransportFn = Callable[[str, str, str, list[str]], str]


class Transport(ABC):
    """Abstract base class for request transports."""

    @abstractmethod
    def __call__(self, method: str, url: str, body: str, headers: list[str]) -> str:
        """
        Send one request and return the raw response body.

        Failures to obtain a reply must raise; a transport never returns a
        placeholder string in place of an error.
        """
        ...


def parse_header_lines(headers: list[str]) -> dict[str, str]:
    """Turn ``["Name: value", ...]`` into a mapping, keeping order."""
    parsed: dict[str, str] = {}
    for line in headers:
        name, sep, value = line.partition(":")
        if not sep:
            raise ValueError(f"Malformed header line: {line!r}")
        parsed[name.strip()] = value.strip()
    return parsed
