"""Reader/Writer adapters exposing a Cryptographer through sequential I/O.

secretbox is not a stream cipher: a Writer buffers everything written to it
and seals it in one go on :meth:`Writer.flush`, and a Reader pulls its whole
source on the first read.  Memory use is therefore bounded by the message size.
Neither adapter is safe for concurrent use; both can be reused via ``reset``.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, BinaryIO

from .utils import (
    ConfigurationError,
    CryptographerError,
    DecryptFailedError,
    EncryptFailedError,
)

if TYPE_CHECKING:
    from .codec import Cryptographer


class Mode(enum.Enum):
    """Direction of a stream adapter."""

    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"


def _check_mode(mode: Mode) -> Mode:
    if not isinstance(mode, Mode):
        raise ConfigurationError(f"Mode should be Mode.ENCRYPT or Mode.DECRYPT, got {mode!r}")
    return mode


def _apply(codec: Cryptographer, mode: Mode, data: bytes) -> bytes:
    if mode is Mode.ENCRYPT:
        return codec.encrypt(data)
    return codec.decrypt(data)


class Reader:
    """Reads from *source* and yields its decrypted (or encrypted) form.

    The first read consumes the entire source and runs the codec once; later
    reads hand out the result.  Once drained, reads return end of input
    until :meth:`reset` is called.

    Args:
        source: Binary file-like object; ``source.read()`` must return all
            remaining bytes.
        codec: The :class:`~cryptographer.codec.Cryptographer` to apply.
        mode: :attr:`Mode.DECRYPT` (default) or :attr:`Mode.ENCRYPT`.

    Raises:
        ConfigurationError: If *mode* is not a :class:`Mode` member.
    """

    def __init__(self, source: BinaryIO, codec: Cryptographer, mode: Mode = Mode.DECRYPT) -> None:
        self._mode = _check_mode(mode)
        self._codec = codec
        self.reset(source)

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def exhausted(self) -> bool:
        return self._done

    def _fill(self) -> None:
        """Read and transform the whole source on first use."""
        if not self._first_read:
            return
        data = self._source.read()
        try:
            self._msg = _apply(self._codec, self._mode, data)
        except CryptographerError as exc:
            self._done = True
            if self._mode is Mode.DECRYPT:
                raise DecryptFailedError(f"Could not decrypt input: {exc}") from exc
            raise EncryptFailedError(f"Could not encrypt input: {exc}") from exc
        self._first_read = False
        self._pos = 0

    def _advance(self, n: int) -> None:
        self._pos += n
        if self._pos >= len(self._msg):
            self._msg = b""
            self._pos = 0
            self._done = True

    def readinto(self, buffer: bytearray | memoryview) -> int:
        """Copy up to ``len(buffer)`` result bytes into *buffer*.

        Returns:
            The number of bytes copied; ``0`` signals end of input.

        Raises:
            DecryptFailedError: If decryption of the source fails.
            EncryptFailedError: If encryption of the source fails.
        """
        if self._done:
            return 0
        self._fill()
        view = memoryview(buffer).cast("B")
        n = min(len(view), len(self._msg) - self._pos)
        view[:n] = self._msg[self._pos : self._pos + n]
        self._advance(n)
        return n

    def read(self, size: int = -1) -> bytes:
        """Return up to *size* result bytes (all remaining if negative).

        Returns ``b""`` at end of input.
        """
        if self._done:
            return b""
        self._fill()
        end = len(self._msg) if size is None or size < 0 else self._pos + size
        chunk = self._msg[self._pos : end]
        self._advance(len(chunk))
        return chunk

    def reset(self, source: BinaryIO) -> None:
        """Return to the initial state, now reading from *source*."""
        self._source = source
        self._msg = b""
        self._pos = 0
        self._done = False
        self._first_read = True


class Writer:
    """Collects writes and emits their encrypted (or decrypted) form to *destination*.

    Nothing reaches *destination* until :meth:`flush` or :meth:`close`.  The
    buffer is kept after a flush, so flushing twice emits twice; call
    :meth:`reset` before writing the next message.

    Args:
        destination: Binary file-like object with a ``write`` method.
        codec: The :class:`~cryptographer.codec.Cryptographer` to apply.
        mode: :attr:`Mode.ENCRYPT` (default) or :attr:`Mode.DECRYPT`.

    Raises:
        ConfigurationError: If *mode* is not a :class:`Mode` member.
    """

    def __init__(self, destination: BinaryIO, codec: Cryptographer, mode: Mode = Mode.ENCRYPT) -> None:
        self._mode = _check_mode(mode)
        self._codec = codec
        self.reset(destination)

    @property
    def mode(self) -> Mode:
        return self._mode

    def write(self, data: bytes) -> int:
        """Buffer *data*; always accepts all of it."""
        self._buffer += data
        return len(data)

    def flush(self) -> None:
        """Run the codec over everything buffered and write the result.

        Codec and destination errors propagate unchanged.
        """
        out = _apply(self._codec, self._mode, bytes(self._buffer))
        self._destination.write(out)

    def close(self) -> None:
        """Same as :meth:`flush`."""
        self.flush()

    def reset(self, destination: BinaryIO) -> None:
        """Drop buffered data and write to *destination* from now on."""
        self._destination = destination
        self._buffer = bytearray()

    def __enter__(self) -> Writer:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()
