"""Exception classes for LeeTracker.

Every error raised by services carries the HTTP status it maps to, so the API
layer can render it without a lookup table.
"""


class TrackerError(Exception):
    """Base exception for all LeeTracker errors."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(TrackerError):
    """Raised when required input is missing or malformed."""

    status_code = 400


class NotFoundError(TrackerError):
    """Raised when a referenced entity does not exist."""

    status_code = 404


class ConflictError(TrackerError):
    """Raised on uniqueness violations."""

    status_code = 409


class ExternalLookupError(TrackerError):
    """Raised when the external profile lookup fails."""

    status_code = 500


class ProfileClaimedError(ConflictError):
    """Raised when a LeetCode profile is already verified by another user."""

    def __init__(self, leetcode_username: str):
        self.leetcode_username = leetcode_username
        super().__init__("This LeetCode profile is already verified by another user")


class VerificationExpiredError(ValidationError):
    """Raised when verifying with a code past its expiry."""

    def __init__(self):
        super().__init__("Verification code has expired. Please initiate verification again.")


class AlreadyVerifiedError(ConflictError):
    """Raised when verifying a pair that is already verified."""

    def __init__(self):
        super().__init__("Profile is already verified")


class CodeNotFoundError(ValidationError):
    """Raised when the verification code is not in the profile bio."""

    def __init__(self):
        super().__init__(
            "Verification code not found in your LeetCode profile bio. "
            "Please make sure you added the code and saved your profile."
        )
