"""
In-memory transport for tests and local wiring.

Returns a canned reply instead of touching the network and records every
request it receives, so tests can assert on exactly what was signed and sent.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union

from payplay_gateway.providers.base import Transport, parse_header_lines

Reply = Union[str, BaseException, Callable[["RecordedCall"], str]]


@dataclass
class RecordedCall:
    method: str
    url: str
    body: str
    headers: list[str] = field(default_factory=list)

    def json(self) -> Any:
        return json.loads(self.body)

    def header(self, name: str) -> Optional[str]:
        return parse_header_lines(self.headers).get(name)


class RecordingTransport(Transport):
    """
    Canned-reply transport.

    ``reply`` may be a response string, an exception instance (raised on every
    call, simulating a network failure) or a callable receiving the
    RecordedCall and returning the response string.
    """

    def __init__(self, reply: Reply = '{"status":"SUCCESS","data":{}}'):
        self._reply = reply
        self.calls: list[RecordedCall] = []

    @property
    def last_call(self) -> RecordedCall:
        return self.calls[-1]

    def __call__(self, method: str, url: str, body: str, headers: list[str]) -> str:
        call = RecordedCall(method=method, url=url, body=body, headers=list(headers))
        self.calls.append(call)

        if isinstance(self._reply, BaseException):
            raise self._reply
        if callable(self._reply):
            return self._reply(call)
        return self._reply
