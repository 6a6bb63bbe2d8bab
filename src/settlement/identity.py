"""Content-derived artifact identity.

An artifact ID is a 32-byte digest (64 hex characters) over the canonical
encoding of the ordered contributor list plus a context discriminator
(usually the current block height). The same inputs always produce the
same ID, so the ID doubles as an idempotency key: resubmitting an
identical contributor table in the same context collides with the
existing record instead of creating a new one.

Usage:
    artifact_id = derive_artifact_id(contributors, context=42)
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Callable, Sequence
from typing import Any

from .models import Contributor


DIGEST_SIZE = 32

_DIGESTS: dict[str, Callable[[bytes], Any]] = {
    "sha256": hashlib.sha256,
    "sha3_256": hashlib.sha3_256,
    "blake2b": lambda data: hashlib.blake2b(data, digest_size=DIGEST_SIZE),
}


def canonical_encoding(contributors: Sequence[Contributor], context: int) -> bytes:
    """Encode contributors and context as canonical JSON bytes.

    Contributor order is significant; keys are sorted and whitespace is
    stripped so the encoding is byte-stable across runs and platforms.
    """
    payload = {
        "context": context,
        "contributors": [
            [c.identity, c.share, c.note] for c in contributors
        ],
    }
    return json.dumps(
        payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False
    ).encode("utf-8")


def derive_artifact_id(
    contributors: Sequence[Contributor],
    context: int,
    digest: str = "sha256",
) -> str:
    """Derive the artifact ID for a contributor table in a given context.

    Pure function: no side effects, identical inputs give identical output.

    Args:
        contributors: Ordered contributor entries
        context: Discriminator from the host (e.g. block height)
        digest: Hash function name ("sha256", "sha3_256", "blake2b")

    Returns:
        Lowercase hex digest, always 2 * DIGEST_SIZE characters

    Raises:
        ValueError: If the digest name is unknown
    """
    try:
        hasher = _DIGESTS[digest]
    except KeyError:
        raise ValueError(
            f"Unknown digest '{digest}'. Expected one of: {', '.join(sorted(_DIGESTS))}"
        ) from None
    return str(hasher(canonical_encoding(contributors, context)).hexdigest())
