from __future__ import annotations

from collections.abc import Callable

import pytest

from secretenv.errors import SecretFetchError


class FakeFetcher:
    """Serves canned payloads and records the refs requested."""

    def __init__(self, payloads: dict[str, str | bytes]) -> None:
        self.payloads = payloads
        self.calls: list[str] = []

    def __call__(self, ref: str) -> str | bytes:
        self.calls.append(ref)
        if ref not in self.payloads:
            raise SecretFetchError(ref, "ResourceNotFoundException", "not found")
        return self.payloads[ref]


@pytest.fixture
def fake_fetcher() -> Callable[[dict[str, str | bytes]], FakeFetcher]:
    return FakeFetcher
