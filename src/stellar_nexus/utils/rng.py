"""Random number helpers for Stellar Nexus.

Every rule function that needs randomness receives a ``random.Random``
instance instead of reaching for the module-level generator. Production code
builds one generator per subsystem; tests build them from a fixed seed so
that outcomes replay exactly.

Seeds may be strings: they are hashed to a stable 64-bit integer so that the
same seed string produces the same stream on every platform.

Examples:
    >>> rng = make_rng(generate_seed("combat", 42))
    >>> check_success(rng, 0.5)["success"] in (True, False)
    True

    >>> rng = make_rng("demo")
    >>> weighted_choice(rng, ["common", "rare"], [0.9, 0.1]) in ("common", "rare")
    True
"""

from __future__ import annotations

import hashlib
import random
from collections.abc import Sequence
from typing import Any, TypeVar

T = TypeVar("T")


def generate_seed(*parts: object) -> str:
    """Build a seed string from its parts.

    Format: ``"part1:part2:..."``. Used to derive independent, reproducible
    streams for each subsystem from one configured seed.

    Args:
        *parts: Components identifying the stream (subsystem name, base seed, ...)

    Returns:
        Seed string joined with ``:``

    Raises:
        ValueError: If no parts are given

    Examples:
        >>> generate_seed("market", 7)
        'market:7'
    """
    if not parts:
        raise ValueError("at least one seed part is required")
    return ":".join(str(part) for part in parts)


def _seed_to_int(seed: str) -> int:
    """Convert seed string to a stable 64-bit integer for random.Random().

    Args:
        seed: Seed string

    Returns:
        64-bit integer derived from SHA-256(seed)
    """
    digest = hashlib.sha256(seed.encode("utf-8")).digest()
    # Use first 8 bytes for a 64-bit integer
    return int.from_bytes(digest[:8], "big", signed=False)


def make_rng(seed: str | int | None = None) -> random.Random:
    """Create a random generator.

    Args:
        seed: ``None`` for an OS-entropy seeded generator, an int used as-is,
            or a string hashed with :func:`_seed_to_int`

    Returns:
        A new ``random.Random`` instance
    """
    if seed is None:
        return random.Random()
    if isinstance(seed, str):
        return random.Random(_seed_to_int(seed))
    return random.Random(seed)


def random_choice(rng: random.Random, options: Sequence[T]) -> T:
    """Choose uniformly from ``options``.

    Raises:
        ValueError: If options is empty
    """
    if not options:
        raise ValueError("options list cannot be empty")
    return options[rng.randrange(len(options))]


def weighted_choice(rng: random.Random, options: Sequence[T], weights: Sequence[float]) -> T:
    """Choose one of ``options`` with relative ``weights``.

    Args:
        rng: Random source
        options: Candidates (non-empty)
        weights: Non-negative relative weights, one per option

    Returns:
        The selected option

    Raises:
        ValueError: If options is empty, lengths differ, or all weights are zero
    """
    if not options:
        raise ValueError("options list cannot be empty")
    if len(options) != len(weights):
        raise ValueError(
            f"options and weights differ in length: {len(options)} != {len(weights)}"
        )
    if any(weight < 0 for weight in weights):
        raise ValueError("weights must be non-negative")
    total = sum(weights)
    if total <= 0:
        raise ValueError("at least one weight must be positive")

    roll = rng.random() * total
    cumulative = 0.0
    for option, weight in zip(options, weights, strict=True):
        cumulative += weight
        if roll < cumulative:
            return option
    # Floating point slack: fall back to the last option with positive weight
    for option, weight in zip(reversed(options), reversed(weights), strict=True):
        if weight > 0:
            return option
    raise AssertionError("unreachable")  # pragma: no cover


def random_int(rng: random.Random, min_val: int, max_val: int) -> int:
    """Random integer in ``[min_val, max_val]`` (inclusive).

    Raises:
        ValueError: If min_val > max_val
    """
    if min_val > max_val:
        raise ValueError(f"min_val ({min_val}) cannot be greater than max_val ({max_val})")
    return rng.randint(min_val, max_val)


def random_float(rng: random.Random, min_val: float, max_val: float) -> float:
    """Uniform float in ``[min_val, max_val)`` drawn from a single ``rng.random()`` call."""
    if min_val > max_val:
        raise ValueError(f"min_val ({min_val}) cannot be greater than max_val ({max_val})")
    return min_val + (max_val - min_val) * rng.random()


def check_success(rng: random.Random, probability: float) -> dict[str, Any]:
    """Check if a random event succeeds.

    One uniform draw in ``[0, 1)`` is compared against ``probability``.

    Args:
        rng: Random source
        probability: Success probability (0.0 to 1.0)

    Returns:
        Dictionary containing:
            - success: Whether the check succeeded
            - roll: The uniform draw
            - probability: The requested probability

    Raises:
        ValueError: If probability not in [0.0, 1.0]
    """
    if not 0.0 <= probability <= 1.0:
        raise ValueError(f"probability must be between 0.0 and 1.0, got {probability}")

    roll = rng.random()
    return {
        "success": roll < probability,
        "roll": roll,
        "probability": probability,
    }
