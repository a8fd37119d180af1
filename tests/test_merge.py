from __future__ import annotations

import pytest

from secretenv import merge
from secretenv.errors import MalformedSecretPayloadError, SecretFetchError


def test_decode_bundle_accepts_flat_string_object() -> None:
    assert merge.decode_bundle('{"A": "1", "B": ""}') == {"A": "1", "B": ""}


def test_decode_bundle_accepts_utf8_bytes() -> None:
    assert merge.decode_bundle('{"NAME": "café"}'.encode()) == {"NAME": "café"}


@pytest.mark.parametrize(
    "payload",
    [
        "not json",
        '["A", "B"]',
        '"just a string"',
        '{"PORT": 5432}',
        '{"NESTED": {"A": "1"}}',
        '{"MAYBE": null}',
        b"\xff\xfe",
    ],
)
def test_decode_bundle_rejects_malformed_payloads(payload: str | bytes) -> None:
    with pytest.raises(MalformedSecretPayloadError) as exc_info:
        merge.decode_bundle(payload, "app/prod")
    assert exc_info.value.kind == "MalformedSecretPayload"
    assert exc_info.value.ref == "app/prod"


def test_decode_bundle_error_does_not_leak_values() -> None:
    with pytest.raises(MalformedSecretPayloadError) as exc_info:
        merge.decode_bundle('{"OK": "hunter2", "BAD": 1}', "app/prod")
    assert "hunter2" not in str(exc_info.value)
    assert "BAD" in str(exc_info.value)


def test_overlay_overwrites_existing_keys() -> None:
    env = {"A": "1", "B": "2"}

    merge.overlay(env, '{"A": "secret", "C": "3"}')

    assert env == {"A": "secret", "B": "2", "C": "3"}


def test_overlay_leaves_env_untouched_on_bad_payload() -> None:
    env = {"A": "1"}

    with pytest.raises(MalformedSecretPayloadError):
        merge.overlay(env, '{"A": "2", "B": 3}')
    assert env == {"A": "1"}


def test_run_later_bundles_win(fake_fetcher) -> None:
    fetch = fake_fetcher({"first": '{"A": "2"}', "second": '{"A": "3"}'})
    env = {"A": "1"}

    merge.run(["first", "second"], env, fetch)

    assert env["A"] == "3"
    assert fetch.calls == ["first", "second"]


def test_run_stops_at_first_fetch_failure(fake_fetcher) -> None:
    fetch = fake_fetcher({"first": '{"A": "2"}', "third": '{"A": "4"}'})
    env = {"A": "1"}

    with pytest.raises(SecretFetchError):
        merge.run(["first", "missing", "third"], env, fetch)
    assert fetch.calls == ["first", "missing"]


def test_run_with_no_refs_is_a_no_op(fake_fetcher) -> None:
    fetch = fake_fetcher({})
    env = {"A": "1"}

    assert merge.run([], env, fetch) == {"A": "1"}
    assert fetch.calls == []
