"""cryptographer — NaCl secret-key encryption with optional zlib compression.

Messages are sealed with XSalsa20-Poly1305 (``secretbox``) and travel as
``nonce (24 bytes) || ciphertext``.  One bit of the nonce records whether the
payload was compressed, so any instance sharing the key can decrypt it.

Two key strategies are available:

* padded key (:meth:`Cryptographer.with_pad`): fast, one key for all messages;
* scrypt key (:meth:`Cryptographer.with_salt`): a fresh key per message,
  stretched from the secret with the nonce as salt.

Example::

    from cryptographer import Cryptographer

    c = Cryptographer.with_pad("qwerty", "qwertyuiopasdfghjklzxcvbnm123456")
    blob = c.encrypt(b"secret message")
    assert c.decrypt(blob) == b"secret message"
"""

from .codec import Cryptographer
from .crypto import Envelope
from .kdf import ScryptParams, ScryptPreset, default_params, get_preset, list_presets
from .keys import PadKey, SaltKey
from .stream import Mode, Reader, Writer
from .utils import (
    AuthenticationError,
    ConfigurationError,
    CryptographerError,
    DecompressionError,
    DecryptFailedError,
    EncryptFailedError,
    KDFError,
    StreamError,
    TooShortError,
)

__all__ = [
    "AuthenticationError",
    "ConfigurationError",
    "Cryptographer",
    "CryptographerError",
    "DecompressionError",
    "DecryptFailedError",
    "EncryptFailedError",
    "Envelope",
    "KDFError",
    "Mode",
    "PadKey",
    "Reader",
    "SaltKey",
    "ScryptParams",
    "ScryptPreset",
    "StreamError",
    "TooShortError",
    "Writer",
    "default_params",
    "get_preset",
    "list_presets",
]
