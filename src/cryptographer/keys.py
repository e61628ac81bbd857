"""Key-derivation strategies.

Both strategies expose ``key_for(nonce) -> bytes`` so that a single
:class:`~cryptographer.crypto.Envelope` can seal and open messages for either:

* :class:`PadKey` pads the user key once and reuses it for every message.
  Fast, but every message shares one key.
* :class:`SaltKey` stretches the user secret with scrypt for every message,
  salted with that message's nonce.  Slow by design; suited to a few messages
  or to large payloads where the derivation cost amortises.
"""

from __future__ import annotations

from typing import Union

from .kdf import ScryptParams, default_params, derive_key
from .utils import KEY_SIZE, ConfigurationError

MIN_PAD_SIZE = 32

Secret = Union[str, bytes]


def _to_bytes(value: Secret) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


class PadKey:
    """Fixed key: ``(secret || pad)[:32]``.

    Args:
        secret: User key; may be shorter or longer than 32 bytes.
        pad: Padding of at least 32 bytes.  It can be a constant in your code.

    Raises:
        ConfigurationError: If *pad* is shorter than 32 bytes.
    """

    def __init__(self, secret: Secret, pad: Secret) -> None:
        pad_bytes = _to_bytes(pad)
        if len(pad_bytes) < MIN_PAD_SIZE:
            raise ConfigurationError(
                f"Pad must be at least {MIN_PAD_SIZE} bytes, got {len(pad_bytes)}"
            )
        self._key = (_to_bytes(secret) + pad_bytes)[:KEY_SIZE]

    def key_for(self, nonce: bytes) -> bytes:
        """Return the instance key; the nonce plays no part."""
        return self._key

    def __repr__(self) -> str:
        return "PadKey(<redacted>)"


class SaltKey:
    """Per-message key: ``scrypt(secret, salt=nonce)``.

    Args:
        secret: User secret of any length.
        params: scrypt work factor.  When ``None``, resolved once from the
            environment via :func:`~cryptographer.kdf.default_params`.
    """

    def __init__(self, secret: Secret, params: ScryptParams | None = None) -> None:
        self._secret = _to_bytes(secret)
        self._params = params if params is not None else default_params()

    @property
    def params(self) -> ScryptParams:
        return self._params

    def key_for(self, nonce: bytes) -> bytes:
        """Derive a fresh 32-byte key salted with *nonce*.

        Raises:
            KDFError: If scrypt fails.
        """
        return derive_key(self._secret, nonce, self._params, KEY_SIZE)

    def __repr__(self) -> str:
        p = self._params
        return f"SaltKey(<redacted>, n={p.n}, r={p.r}, p={p.p})"
