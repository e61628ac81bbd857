"""Shared pytest fixtures for cryptographer tests."""

from __future__ import annotations

import pytest

from cryptographer import Cryptographer, Envelope, ScryptParams

KEY = "qwerty"
PAD = "x" * 32


@pytest.fixture(scope="session")
def fast_params() -> ScryptParams:
    """Cheap scrypt parameters so per-message stretching stays fast in tests."""
    return ScryptParams(n=2**4, r=8, p=1)


@pytest.fixture
def fixed_envelope() -> Envelope:
    """Envelope whose random source always returns 0xFF bytes."""
    return Envelope(random=lambda n: b"\xff" * n)


@pytest.fixture(scope="session")
def pad_codec() -> Cryptographer:
    return Cryptographer.with_pad(KEY, PAD, compress=False)


@pytest.fixture(scope="session")
def pad_codec_compressed() -> Cryptographer:
    return Cryptographer.with_pad(KEY, PAD, compress=True)


@pytest.fixture(scope="session")
def salt_codec(fast_params: ScryptParams) -> Cryptographer:
    return Cryptographer.with_salt(KEY, compress=False, params=fast_params)


@pytest.fixture(scope="session")
def salt_codec_compressed(fast_params: ScryptParams) -> Cryptographer:
    return Cryptographer.with_salt(KEY, compress=True, params=fast_params)


@pytest.fixture(
    params=["pad_codec", "pad_codec_compressed", "salt_codec", "salt_codec_compressed"],
)
def any_codec(request: pytest.FixtureRequest) -> Cryptographer:
    """Every strategy/compression combination in turn."""
    return request.getfixturevalue(request.param)
