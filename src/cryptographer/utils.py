"""Utility functions: exceptions, wire-format constants, nonce flag and zlib helpers."""

from __future__ import annotations

import zlib

# ---------------------------------------------------------------------------
# Library-specific exceptions
# ---------------------------------------------------------------------------


class CryptographerError(Exception):
    """Base exception for cryptographer."""


class ConfigurationError(CryptographerError):
    """Raised when a codec, key or stream adapter is misconfigured."""


class TooShortError(CryptographerError):
    """Raised when an envelope is smaller than the minimum possible size."""


class AuthenticationError(CryptographerError):
    """Raised when the secretbox rejects a ciphertext (wrong key or tampering)."""


class DecompressionError(CryptographerError):
    """Raised when a compressed payload is not a valid zlib stream."""


class KDFError(CryptographerError):
    """Raised when scrypt key stretching fails."""


class StreamError(CryptographerError):
    """Base exception for Reader failures on the wrapped source."""


class DecryptFailedError(StreamError):
    """Raised when a decrypting Reader cannot decrypt its source."""


class EncryptFailedError(StreamError):
    """Raised when an encrypting Reader cannot encrypt its source."""


# ---------------------------------------------------------------------------
# Wire format
# ---------------------------------------------------------------------------
# nonce (24 bytes)  |  secretbox ciphertext (payload + 16-byte authenticator)
# The lowest bit of the last nonce byte marks a zlib-compressed payload.
KEY_SIZE = 32
NONCE_SIZE = 24
OVERHEAD = 16
MIN_ENVELOPE_SIZE = NONCE_SIZE + OVERHEAD  # 40 bytes
COMPRESS_BIT = 0x01


def flag_nonce(nonce: bytes, compressed: bool) -> bytes:
    """Return *nonce* with the compression bit cleared, then set iff *compressed*.

    Args:
        nonce: Random nonce of exactly ``NONCE_SIZE`` bytes.
        compressed: Whether the sealed payload is zlib-compressed.

    Returns:
        The flagged nonce.
    """
    if len(nonce) != NONCE_SIZE:
        raise ValueError(f"Nonce must be exactly {NONCE_SIZE} bytes, got {len(nonce)}")
    flagged = bytearray(nonce)
    flagged[-1] &= ~COMPRESS_BIT & 0xFF
    if compressed:
        flagged[-1] |= COMPRESS_BIT
    return bytes(flagged)


def is_compressed(nonce: bytes) -> bool:
    """Return ``True`` if the compression bit of *nonce* is set."""
    return nonce[NONCE_SIZE - 1] & COMPRESS_BIT == COMPRESS_BIT


# ---------------------------------------------------------------------------
# Compression helpers
# ---------------------------------------------------------------------------


def compress(data: bytes) -> bytes:
    """Compress *data* into a zlib stream."""
    return zlib.compress(data)


def decompress(data: bytes) -> bytes:
    """Decompress a zlib stream.

    Raises:
        DecompressionError: If *data* is malformed or truncated.
    """
    decompressor = zlib.decompressobj()
    try:
        out = decompressor.decompress(data)
        out += decompressor.flush()
    except zlib.error as exc:
        raise DecompressionError(f"Malformed compressed payload: {exc}") from exc
    if not decompressor.eof:
        raise DecompressionError("Compressed payload is truncated")
    return out
