"""LeetCode profile ownership verification for LeeTracker."""

from leetracker.verification.codes import generate_verification_code
from leetracker.verification.workflow import ProfileVerificationService, verification_instructions

__all__ = [
    "generate_verification_code",
    "ProfileVerificationService",
    "verification_instructions",
]
