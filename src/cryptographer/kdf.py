"""scrypt work-factor configuration and key stretching."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt
from dotenv import load_dotenv

from .utils import KEY_SIZE, ConfigurationError, KDFError

logger = logging.getLogger(__name__)

ENV_PRESET = "CRYPTOGRAPHER_SCRYPT_PRESET"
ENV_N = "CRYPTOGRAPHER_SCRYPT_N"
ENV_R = "CRYPTOGRAPHER_SCRYPT_R"
ENV_P = "CRYPTOGRAPHER_SCRYPT_P"


@dataclass(frozen=True)
class ScryptParams:
    """scrypt cost parameters.

    Attributes:
        n: CPU/memory cost, a power of two greater than one.
        r: Block size.
        p: Parallelisation factor.
    """

    n: int
    r: int = 8
    p: int = 1

    def __post_init__(self) -> None:
        if self.n < 2 or self.n & (self.n - 1):
            raise ConfigurationError(f"scrypt n must be a power of two greater than 1, got {self.n}")
        if self.r < 1:
            raise ConfigurationError(f"scrypt r must be positive, got {self.r}")
        if self.p < 1:
            raise ConfigurationError(f"scrypt p must be positive, got {self.p}")

    @property
    def memory(self) -> int:
        """Approximate memory needed for one derivation, in bytes."""
        return 128 * self.r * self.n


# ---------------------------------------------------------------------------
# Preset registry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ScryptPreset:
    """A named, documented work factor."""

    name: str
    description: str
    params: ScryptParams


DEFAULT_PRESET = "default"

PRESET_REGISTRY: tuple[ScryptPreset, ...] = (
    ScryptPreset(
        name="default",
        description="Conservative default, ~32 MiB per derivation (recommended)",
        params=ScryptParams(n=2**15, r=8, p=1),
    ),
    ScryptPreset(
        name="interactive",
        description="Faster derivation for many small messages, ~16 MiB",
        params=ScryptParams(n=2**14, r=8, p=1),
    ),
    ScryptPreset(
        name="sensitive",
        description="Slow and memory hungry, ~1 GiB; for rare, high-value messages",
        params=ScryptParams(n=2**20, r=8, p=1),
    ),
)


def list_presets() -> tuple[ScryptPreset, ...]:
    """Return all built-in work-factor presets."""
    return PRESET_REGISTRY


def get_preset(name: str) -> ScryptPreset | None:
    """Look up a preset by name. Returns ``None`` if not in the registry."""
    for preset in PRESET_REGISTRY:
        if preset.name == name:
            return preset
    return None


# ---------------------------------------------------------------------------
# Environment configuration
# ---------------------------------------------------------------------------


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


def default_params() -> ScryptParams:
    """Resolve the scrypt parameters from ``.env`` / the environment.

    ``CRYPTOGRAPHER_SCRYPT_PRESET`` selects a preset by name; the individual
    ``CRYPTOGRAPHER_SCRYPT_N``, ``_R`` and ``_P`` variables override fields of
    that preset.  With nothing set, the ``default`` preset is returned.

    Raises:
        ConfigurationError: On an unknown preset or invalid values.
    """
    load_dotenv()
    preset_name = os.environ.get(ENV_PRESET) or DEFAULT_PRESET
    preset = get_preset(preset_name)
    if preset is None:
        names = ", ".join(p.name for p in PRESET_REGISTRY)
        raise ConfigurationError(f"Unknown scrypt preset {preset_name!r} (expected one of: {names})")

    base = preset.params
    params = ScryptParams(
        n=_env_int(ENV_N, base.n),
        r=_env_int(ENV_R, base.r),
        p=_env_int(ENV_P, base.p),
    )
    logger.debug("scrypt parameters n=%d r=%d p=%d (preset %s)", params.n, params.r, params.p, preset.name)
    return params


# ---------------------------------------------------------------------------
# Key stretching
# ---------------------------------------------------------------------------


def derive_key(secret: bytes, salt: bytes, params: ScryptParams, length: int = KEY_SIZE) -> bytes:
    """Stretch *secret* into a *length*-byte key using scrypt with *salt*.

    Raises:
        KDFError: If scrypt cannot run with these parameters (e.g. out of memory).
    """
    try:
        kdf = Scrypt(salt=salt, length=length, n=params.n, r=params.r, p=params.p)
        return kdf.derive(secret)
    except (MemoryError, ValueError, UnsupportedAlgorithm) as exc:
        raise KDFError(f"scrypt key derivation failed: {exc}") from exc
