"""Tests for the padded and scrypt key strategies."""

from __future__ import annotations

import pytest

from cryptographer import ConfigurationError, PadKey, SaltKey, ScryptParams
from cryptographer.kdf import ENV_N, ENV_P, ENV_PRESET, ENV_R, get_preset


class TestPadKey:
    """Fixed key built from secret and pad."""

    def test_pad_too_short(self) -> None:
        with pytest.raises(ConfigurationError, match="at least 32"):
            PadKey("qwerty", "x" * 31)

    def test_pad_exactly_32(self) -> None:
        key = PadKey("qwerty", "x" * 32)
        assert key.key_for(b"\x00" * 24) == b"qwerty" + b"x" * 26

    def test_long_secret_truncated(self) -> None:
        secret = "s" * 40
        assert PadKey(secret, "x" * 32).key_for(b"") == b"s" * 32

    def test_empty_secret_uses_pad(self) -> None:
        pad = bytes(range(32))
        assert PadKey(b"", pad).key_for(b"") == pad

    def test_str_and_bytes_equivalent(self) -> None:
        assert PadKey("qwerty", "x" * 32).key_for(b"") == PadKey(b"qwerty", b"x" * 32).key_for(b"")

    def test_pad_length_counted_in_bytes(self) -> None:
        # 16 two-byte characters
        PadKey("k", "é" * 16)

    def test_nonce_ignored(self) -> None:
        key = PadKey("qwerty", "x" * 32)
        assert key.key_for(b"\x00" * 24) == key.key_for(b"\xff" * 24)

    def test_repr_hides_key(self) -> None:
        assert "qwerty" not in repr(PadKey("qwerty", "x" * 32))


class TestSaltKey:
    """Per-message scrypt key."""

    def test_deterministic_per_nonce(self, fast_params: ScryptParams) -> None:
        key = SaltKey("qwerty", fast_params)
        nonce = b"\x01" * 24
        assert key.key_for(nonce) == key.key_for(nonce)
        assert len(key.key_for(nonce)) == 32

    def test_differs_per_nonce(self, fast_params: ScryptParams) -> None:
        key = SaltKey("qwerty", fast_params)
        assert key.key_for(b"\x01" * 24) != key.key_for(b"\x02" * 24)

    def test_differs_per_secret(self, fast_params: ScryptParams) -> None:
        nonce = b"\x01" * 24
        assert SaltKey("a", fast_params).key_for(nonce) != SaltKey("b", fast_params).key_for(nonce)

    def test_any_secret_length(self, fast_params: ScryptParams) -> None:
        SaltKey(b"", fast_params).key_for(b"\x00" * 24)
        SaltKey(b"k" * 1000, fast_params).key_for(b"\x00" * 24)

    def test_default_params(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in (ENV_PRESET, ENV_N, ENV_R, ENV_P):
            monkeypatch.delenv(name, raising=False)
        assert SaltKey("qwerty").params == ScryptParams(n=2**15, r=8, p=1)

    def test_params_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in (ENV_N, ENV_R, ENV_P):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setenv(ENV_PRESET, "interactive")
        preset = get_preset("interactive")
        assert preset is not None
        assert SaltKey("qwerty").params == preset.params

    def test_repr_hides_secret(self, fast_params: ScryptParams) -> None:
        text = repr(SaltKey("qwerty", fast_params))
        assert "qwerty" not in text
        assert "n=16" in text
