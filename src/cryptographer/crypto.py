"""Envelope layer: NaCl secretbox (XSalsa20-Poly1305) with an in-nonce compression flag."""

from __future__ import annotations

from typing import Callable, Protocol

import nacl.utils
from nacl.exceptions import CryptoError
from nacl.secret import SecretBox

from .utils import (
    MIN_ENVELOPE_SIZE,
    NONCE_SIZE,
    AuthenticationError,
    TooShortError,
    compress as _compress,
    decompress as _decompress,
    flag_nonce,
    is_compressed,
)

RandomSource = Callable[[int], bytes]


class KeySource(Protocol):
    def key_for(self, nonce: bytes) -> bytes: ...


class Envelope:
    """Builds and parses ``nonce (24) || secretbox ciphertext``.

    The lowest bit of the last nonce byte records whether the payload was
    zlib-compressed before sealing, so the wire format is the same size with
    or without compression.  Only the received nonce decides decompression.

    Args:
        random: Callable returning *n* cryptographically secure random bytes.
            Defaults to :func:`nacl.utils.random`; tests may inject a
            deterministic source to get fixed nonces.
    """

    def __init__(self, random: RandomSource = nacl.utils.random) -> None:
        self._random = random

    def seal(self, keys: KeySource, compress: bool, plaintext: bytes) -> bytes:
        """Seal *plaintext* and return ``nonce || ciphertext``.

        Errors from the random source are propagated as-is.
        """
        nonce = flag_nonce(self._random(NONCE_SIZE), compress)
        key = keys.key_for(nonce)
        payload = _compress(bytes(plaintext)) if compress else bytes(plaintext)
        sealed = SecretBox(key).encrypt(payload, nonce)
        return nonce + sealed.ciphertext

    def open(self, keys: KeySource, envelope: bytes) -> bytes:
        """Open an envelope produced by :meth:`seal`.

        Raises:
            TooShortError: If the envelope cannot hold a nonce and authenticator.
            AuthenticationError: On wrong key or tampered data.
            DecompressionError: If the flag is set but the payload is not zlib.
        """
        envelope = bytes(envelope)
        if len(envelope) < MIN_ENVELOPE_SIZE:
            raise TooShortError(
                f"Envelope too short ({len(envelope)} bytes, minimum {MIN_ENVELOPE_SIZE})"
            )
        nonce = envelope[:NONCE_SIZE]
        key = keys.key_for(nonce)
        try:
            out = SecretBox(key).decrypt(envelope[NONCE_SIZE:], nonce)
        except CryptoError as exc:
            raise AuthenticationError("Decryption failed (wrong key or tampered data)") from exc
        if is_compressed(nonce):
            out = _decompress(out)
        return out
