"""
Seed code utilities.

Maps are shared as 10-digit numeric seed codes. The generators themselves
never touch Python's global random state; only generate_random_seed() uses
system randomness, to hand callers a fresh code.
"""

import re
import secrets

import structlog

logger = structlog.get_logger()

DEFAULT_SEED_CODE = "1234567890"
SEED_CODE_PATTERN = re.compile(r"^\d{10}$")


def generate_random_seed() -> str:
    """
    Create a fresh 10-digit seed code from system randomness.

    Returns:
        Numeric string between 1000000000 and 9999999999
    """
    return str(1_000_000_000 + secrets.randbelow(9_000_000_000))


def hash_code(text: str) -> int:
    """
    32-bit string hash (h = h * 31 + code point, wrapped to signed int32).

    Lets free-form text be used as a seed.
    """
    h = 0
    for char in text:
        h = (h * 31 + ord(char)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return h


def seed_from_code(code: str) -> int:
    """
    Turn a seed code into the integer seed for MapGenerator.

    The code is hashed with hash_code(), so nearby codes give unrelated maps.
    Anything that is not exactly ten digits falls back to the default code.

    Args:
        code: Seed code entered by the user

    Returns:
        Integer seed
    """
    code = str(code).strip()
    if not SEED_CODE_PATTERN.match(code):
        logger.warning("Invalid seed code, using default", code=code, default=DEFAULT_SEED_CODE)
        code = DEFAULT_SEED_CODE
    return hash_code(code)
