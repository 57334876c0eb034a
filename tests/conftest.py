"""Shared fixtures: an in-memory transport serving walk/get from a dict."""

from typing import Dict, Iterable, List, Sequence

import pytest

from oltpoll.exceptions import TransportError
from oltpoll.models import DeviceEndpoint


def _oid_key(oid: str):
    return tuple(int(part) for part in oid.split('.'))


def table(base: str, rows: Dict[str, object]) -> Dict[str, object]:
    """Expand {suffix: value} into {base.suffix: value}."""
    return {f"{base}.{suffix}": value for suffix, value in rows.items()}


class FakeTransport:
    """
    Transport double.

    `fail` holds table bases (for walk) or addresses (for get) that
    raise TransportError; `fail_get` makes every GET fail.
    """

    def __init__(self, data: Dict[str, object] = None, fail: Iterable[str] = (), fail_get: bool = False):
        self.data = dict(data or {})
        self.fail = set(fail)
        self.fail_get = fail_get
        self.walked: List[str] = []
        self.got: List[List[str]] = []

    async def walk(self, base: str) -> Dict[str, object]:
        self.walked.append(base)
        if base in self.fail:
            raise TransportError(f"timeout walking {base}", host="fake", oid=base)
        prefix = base + '.'
        rows = [(oid, value) for oid, value in self.data.items() if oid.startswith(prefix)]
        return dict(sorted(rows, key=lambda row: _oid_key(row[0])))

    async def get(self, addresses: Sequence[str]) -> Dict[str, object]:
        self.got.append(list(addresses))
        if self.fail_get or any(a in self.fail for a in addresses):
            raise TransportError("request timed out", host="fake")
        return {a: self.data[a] for a in addresses if a in self.data}


@pytest.fixture
def endpoint() -> DeviceEndpoint:
    return DeviceEndpoint("192.0.2.10", community="public")
