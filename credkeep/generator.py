"""
credkeep.generator
Random password generator driven by a character-class policy.
"""

from dataclasses import dataclass
from random import SystemRandom
import string
from typing import Any, Optional


SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"
FALLBACK_ALPHABET = string.ascii_lowercase + string.digits
_sysrand = SystemRandom()


@dataclass(frozen=True)
class GenerationPolicy:
    use_upper: bool = True
    use_lower: bool = True
    use_digits: bool = True
    use_symbols: bool = True


def alphabet_for(
    use_upper: bool = True,
    use_lower: bool = True,
    use_digits: bool = True,
    use_symbols: bool = True,
) -> str:
    """
    Concatenate the enabled pools in the order upper, lower, digits, symbols.
    Falls back to lowercase + digits when nothing is enabled.
    """
    pools = []
    if use_upper:
        pools.append(string.ascii_uppercase)
    if use_lower:
        pools.append(string.ascii_lowercase)
    if use_digits:
        pools.append(string.digits)
    if use_symbols:
        pools.append(SYMBOLS)
    return "".join(pools) or FALLBACK_ALPHABET


def generate(
    length: int = 12,
    use_upper: bool = True,
    use_lower: bool = True,
    use_digits: bool = True,
    use_symbols: bool = True,
    rng: Optional[Any] = None,
) -> str:
    """
    Generate a password of exactly `length` characters.

    Every position is drawn independently from the usable alphabet, so a
    result is not guaranteed to contain every enabled class. A length of
    zero or less gives an empty string.
    """
    rng = rng or _sysrand
    all_chars = alphabet_for(use_upper, use_lower, use_digits, use_symbols)
    return "".join(rng.choice(all_chars) for _ in range(max(length, 0)))


def generate_with_policy(length: int, policy: GenerationPolicy, rng: Optional[Any] = None) -> str:
    return generate(
        length,
        use_upper=policy.use_upper,
        use_lower=policy.use_lower,
        use_digits=policy.use_digits,
        use_symbols=policy.use_symbols,
        rng=rng,
    )
