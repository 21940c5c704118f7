"""Verification code generation.

Codes are placed in a public LeetCode bio, so they only need to be unguessable
and unique per issuance, not secret after use.
"""

import os
import secrets
import string
import time
from typing import Optional
from dotenv import load_dotenv

from leetracker.models.constants import VERIFICATION_CODE_RANDOM_LENGTH

load_dotenv()

VERIFICATION_CODE_PREFIX = os.getenv("VERIFICATION_CODE_PREFIX", "leetracker")

_ALPHABET = string.ascii_lowercase + string.digits


def generate_verification_code(prefix: Optional[str] = None) -> str:
    """Generate `<prefix>-<6 random [a-z0-9]>-<epoch milliseconds>`."""
    token = "".join(secrets.choice(_ALPHABET) for _ in range(VERIFICATION_CODE_RANDOM_LENGTH))
    return f"{prefix or VERIFICATION_CODE_PREFIX}-{token}-{int(time.time() * 1000)}"
