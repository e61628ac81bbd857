"""Cryptographer — the single public entry point for encryption/decryption."""

from __future__ import annotations

import pathlib
from typing import BinaryIO, Union

from .crypto import Envelope, KeySource
from .kdf import ScryptParams
from .keys import PadKey, SaltKey, Secret
from .stream import Mode, Reader, Writer


class Cryptographer:
    """Symmetric authenticated-encryption codec over NaCl secretbox.

    Combines an :class:`~cryptographer.crypto.Envelope` with a key strategy
    and a compression toggle.  Instances hold no mutable state and can be
    shared between threads.

    Example::

        c = Cryptographer.with_pad("qwerty", "x" * 32)
        blob = c.encrypt(b"hello world")
        assert c.decrypt(blob) == b"hello world"

    Args:
        keys: Key strategy, :class:`~cryptographer.keys.PadKey` or
            :class:`~cryptographer.keys.SaltKey`.
        compress: If ``True``, zlib-compress plaintext before sealing.
            Decryption always follows the flag carried by the envelope, so
            this setting only affects :meth:`encrypt`.
        envelope: Envelope to use; pass one with a custom random source in tests.
    """

    def __init__(
        self,
        keys: KeySource,
        compress: bool = False,
        envelope: Envelope | None = None,
    ) -> None:
        self._keys = keys
        self._compress = compress
        self._envelope = envelope if envelope is not None else Envelope()

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def with_pad(
        cls,
        secret: Secret,
        pad: Secret,
        compress: bool = False,
        envelope: Envelope | None = None,
    ) -> Cryptographer:
        """Codec with a fixed key padded from *secret* and *pad* (>= 32 bytes).

        Raises:
            ConfigurationError: If *pad* is shorter than 32 bytes.
        """
        return cls(PadKey(secret, pad), compress=compress, envelope=envelope)

    @classmethod
    def with_salt(
        cls,
        secret: Secret,
        compress: bool = False,
        params: ScryptParams | None = None,
        envelope: Envelope | None = None,
    ) -> Cryptographer:
        """Codec deriving a scrypt key per message, salted with its nonce."""
        return cls(SaltKey(secret, params), compress=compress, envelope=envelope)

    @property
    def compress(self) -> bool:
        return self._compress

    # ------------------------------------------------------------------
    # Core API
    # ------------------------------------------------------------------

    def encrypt(self, plaintext: bytes) -> bytes:
        """Encrypt *plaintext* and return the envelope (nonce + ciphertext).

        Raises:
            KDFError: If key stretching fails.
        """
        return self._envelope.seal(self._keys, self._compress, plaintext)

    def decrypt(self, envelope: bytes) -> bytes:
        """Decrypt an envelope produced by :meth:`encrypt`.

        Raises:
            TooShortError: If *envelope* is shorter than 40 bytes.
            AuthenticationError: On wrong key or tampered data.
            DecompressionError: If a compressed payload is malformed.
            KDFError: If key stretching fails.
        """
        return self._envelope.open(self._keys, envelope)

    # ------------------------------------------------------------------
    # Convenience helpers
    # ------------------------------------------------------------------

    def encrypt_str(self, text: str, encoding: str = "utf-8") -> bytes:
        """Encrypt a string."""
        return self.encrypt(text.encode(encoding))

    def decrypt_str(self, envelope: bytes, encoding: str = "utf-8") -> str:
        """Decrypt an envelope produced by :meth:`encrypt_str`."""
        return self.decrypt(envelope).decode(encoding)

    def encrypt_file(self, path: Union[str, pathlib.Path]) -> bytes:
        """Read a file and encrypt its contents."""
        return self.encrypt(pathlib.Path(path).read_bytes())

    def decrypt_file(
        self, envelope: bytes, output_path: Union[str, pathlib.Path]
    ) -> None:
        """Decrypt *envelope* and write the plaintext to *output_path*."""
        pathlib.Path(output_path).write_bytes(self.decrypt(envelope))

    # ------------------------------------------------------------------
    # Stream adapters
    # ------------------------------------------------------------------

    def new_reader(self, source: BinaryIO, mode: Mode = Mode.DECRYPT) -> Reader:
        """Return a :class:`~cryptographer.stream.Reader` over *source* sharing this codec."""
        return Reader(source, self, mode)

    def new_writer(self, destination: BinaryIO, mode: Mode = Mode.ENCRYPT) -> Writer:
        """Return a :class:`~cryptographer.stream.Writer` to *destination* sharing this codec."""
        return Writer(destination, self, mode)

    def __repr__(self) -> str:
        return f"Cryptographer({self._keys!r}, compress={self._compress})"
