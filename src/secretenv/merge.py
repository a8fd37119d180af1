"""Overlaying secret bundles onto an env mapping."""

import logging
from collections.abc import Iterable

from pydantic import StrictStr, TypeAdapter, ValidationError

from secretenv.errors import MalformedSecretPayloadError
from secretenv.filestore import EnvMap
from secretenv.secret_store import SecretFetcher

logger = logging.getLogger(__name__)

_BUNDLE_ADAPTER = TypeAdapter(dict[str, StrictStr])


def decode_bundle(payload: str | bytes, ref: str = "") -> dict[str, str]:
    """Decode a bundle payload as a flat JSON object of string values.

    Args:
        payload (str | bytes): The raw payload returned by the secret store.
        ref (str): The bundle ref, used only in error messages.

    Returns:
        bundle (dict[str, str]): The decoded key/value pairs.

    Raises:
        MalformedSecretPayloadError: If the payload is not UTF-8, not JSON, not
            an object, or has a non-string value.
    """
    if isinstance(payload, bytes):
        try:
            payload = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            msg = f"payload is not valid UTF-8 ({e.reason})"
            raise MalformedSecretPayloadError(ref, msg) from e
    try:
        return _BUNDLE_ADAPTER.validate_json(payload, strict=True)
    except ValidationError as e:
        # only report locations and error types, the input may be a secret
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['type']}"
            for err in e.errors(include_input=False, include_url=False)
        )
        msg = f"payload is not a flat JSON object of strings ({problems})"
        raise MalformedSecretPayloadError(ref, msg) from e


def overlay(env: EnvMap, payload: str | bytes, ref: str = "") -> None:
    """Decode ``payload`` and overwrite its keys in ``env``.

    ``env`` is left untouched when the payload fails to decode.
    """
    bundle = decode_bundle(payload, ref)
    env.update(bundle)
    logger.info("Applied %d keys from secret bundle %s", len(bundle), ref)


def run(bundle_refs: Iterable[str], env: EnvMap, fetch: SecretFetcher) -> EnvMap:
    """Fetch and overlay each bundle in order, later bundles winning."""
    for ref in bundle_refs:
        logger.info("Fetching secret bundle %s", ref)
        overlay(env, fetch(ref), ref)
    return env
