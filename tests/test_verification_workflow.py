"""Tests for the LeetCode profile verification workflow."""

import re
import pytest
from datetime import datetime, timedelta
from unittest.mock import patch

from leetracker.errors import (
    AlreadyVerifiedError,
    CodeNotFoundError,
    NotFoundError,
    ProfileClaimedError,
    ValidationError,
    VerificationExpiredError,
)
from leetracker.verification.codes import generate_verification_code
from leetracker.verification.workflow import ProfileVerificationService

CODE_PATTERN = re.compile(r"^leetracker-[a-z0-9]{6}-\d+$")


class FrozenClock:
    """Settable clock for expiry tests."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock():
    return FrozenClock(datetime(2024, 5, 15, 12, 0, 0))


@pytest.fixture
def service(db_session, profile_client, clock):
    return ProfileVerificationService(db_session, profile_client, clock=clock)


class TestVerificationCodes:
    """Test code generation."""

    def test_code_format(self):
        assert CODE_PATTERN.match(generate_verification_code())

    def test_codes_are_unique(self):
        codes = {generate_verification_code() for _ in range(50)}
        assert len(codes) == 50

    def test_custom_prefix(self):
        assert generate_verification_code("lt").startswith("lt-")


class TestInitiate:
    """Test initiate()."""

    def test_initiate_issues_code_with_24h_expiry(self, service, test_user_id, clock):
        challenge = service.initiate(test_user_id, "alice123")

        assert CODE_PATTERN.match(challenge.verification_code)
        assert challenge.expires_at == clock.now + timedelta(hours=24)
        assert challenge.instructions
        assert challenge.instructions[-1] == "This verification code expires in 24 hours."

    def test_instructions_follow_configured_ttl(self, service, test_user_id, clock):
        with patch("leetracker.verification.workflow.CODE_TTL_HOURS", 6):
            challenge = service.initiate(test_user_id, "alice123")

        assert challenge.expires_at == clock.now + timedelta(hours=6)
        assert challenge.instructions[-1] == "This verification code expires in 6 hours."

    def test_initiate_requires_fields(self, service, test_user_id):
        with pytest.raises(ValidationError):
            service.initiate(test_user_id, "")
        with pytest.raises(ValidationError):
            service.initiate(None, "alice123")

    def test_initiate_unknown_user(self, service):
        with pytest.raises(NotFoundError):
            service.initiate("missing-user", "alice123")

    def test_reinitiate_replaces_code(self, service, verification_repository, test_user_id):
        first = service.initiate(test_user_id, "alice123")
        second = service.initiate(test_user_id, "alice123")

        record = verification_repository.get(test_user_id, "alice123")
        assert record.verification_code == second.verification_code
        assert record.verification_code != first.verification_code
        assert record.is_verified is False


class TestVerify:
    """Test verify()."""

    def test_verify_before_initiate(self, service, test_user_id):
        with pytest.raises(NotFoundError) as exc_info:
            service.verify(test_user_id, "alice123")
        assert "initiate verification first" in exc_info.value.message

    def test_verify_succeeds_when_code_in_bio(self, service, profile_client, user_repository, test_user_id):
        challenge = service.initiate(test_user_id, "alice123")
        profile_client.bios["alice123"] = f"Hi! {challenge.verification_code} :)"

        verified = service.verify(test_user_id, "alice123")

        assert verified.is_verified is True
        assert verified.verified_at is not None
        assert user_repository.get(test_user_id).leetcode_username == "alice123"

    def test_verify_fails_when_code_missing(self, service, profile_client, test_user_id):
        service.initiate(test_user_id, "alice123")
        profile_client.bios["alice123"] = "just a bio"

        with pytest.raises(CodeNotFoundError):
            service.verify(test_user_id, "alice123")

    def test_verify_profile_not_found(self, service, test_user_id):
        service.initiate(test_user_id, "alice123")
        with pytest.raises(NotFoundError):
            service.verify(test_user_id, "alice123")

    def test_verify_after_expiry(self, service, profile_client, clock, test_user_id):
        challenge = service.initiate(test_user_id, "alice123")
        profile_client.bios["alice123"] = challenge.verification_code

        clock.now += timedelta(hours=24, seconds=1)
        with pytest.raises(VerificationExpiredError):
            service.verify(test_user_id, "alice123")
        assert profile_client.calls == []

    def test_verify_at_expiry_instant_still_allowed(self, service, profile_client, clock, test_user_id):
        challenge = service.initiate(test_user_id, "alice123")
        profile_client.bios["alice123"] = challenge.verification_code

        clock.now += timedelta(hours=24)
        assert service.verify(test_user_id, "alice123").is_verified is True

    def test_verify_twice(self, service, profile_client, test_user_id):
        challenge = service.initiate(test_user_id, "alice123")
        profile_client.bios["alice123"] = challenge.verification_code
        service.verify(test_user_id, "alice123")

        with pytest.raises(AlreadyVerifiedError):
            service.verify(test_user_id, "alice123")

    def test_second_user_cannot_claim_verified_profile(self, service, profile_client, test_user_id, other_user_id):
        challenge = service.initiate(test_user_id, "alice123")
        profile_client.bios["alice123"] = challenge.verification_code
        service.verify(test_user_id, "alice123")

        with pytest.raises(ProfileClaimedError):
            service.initiate(other_user_id, "alice123")

    def test_claim_between_initiate_and_verify(self, service, profile_client, test_user_id, other_user_id):
        mine = service.initiate(test_user_id, "alice123")
        theirs = service.initiate(other_user_id, "alice123")

        profile_client.bios["alice123"] = f"{mine.verification_code} {theirs.verification_code}"
        service.verify(test_user_id, "alice123")

        with pytest.raises(ProfileClaimedError):
            service.verify(other_user_id, "alice123")

    def test_verifying_new_username_releases_previous_one(
        self, service, profile_client, db_session, user_repository, test_user_id, other_user_id
    ):
        from leetracker.database.models import ProfileVerificationDB

        for username in ("alice123", "bob456"):
            challenge = service.initiate(test_user_id, username)
            profile_client.bios[username] = challenge.verification_code
            service.verify(test_user_id, username)

        verified = (
            db_session.query(ProfileVerificationDB)
            .filter(ProfileVerificationDB.user_id == test_user_id, ProfileVerificationDB.is_verified.is_(True))
            .all()
        )
        assert [row.leetcode_username for row in verified] == ["bob456"]
        assert user_repository.get(test_user_id).leetcode_username == "bob456"
        assert service.status(test_user_id).verified_username == "bob456"

        # The released username is free for someone else.
        challenge = service.initiate(other_user_id, "alice123")
        profile_client.bios["alice123"] = challenge.verification_code
        assert service.verify(other_user_id, "alice123").is_verified is True


class TestStatusAndRemove:
    """Test status() and remove()."""

    def test_status_without_verification(self, service, test_user_id):
        status = service.status(test_user_id)
        assert status.has_verified_profile is False
        assert status.verified_username is None

    def test_status_after_verification(self, service, profile_client, test_user_id):
        challenge = service.initiate(test_user_id, "alice123")
        profile_client.bios["alice123"] = challenge.verification_code
        service.verify(test_user_id, "alice123")

        status = service.status(test_user_id)
        assert status.has_verified_profile is True
        assert status.verified_username == "alice123"
        assert status.verified_at is not None

    def test_status_unknown_user(self, service):
        with pytest.raises(NotFoundError):
            service.status("missing-user")

    def test_remove_returns_to_unrequested(self, service, profile_client, user_repository, test_user_id):
        challenge = service.initiate(test_user_id, "alice123")
        profile_client.bios["alice123"] = challenge.verification_code
        service.verify(test_user_id, "alice123")

        assert service.remove(test_user_id) == 1
        assert service.status(test_user_id).has_verified_profile is False
        assert user_repository.get(test_user_id).leetcode_username is None
        with pytest.raises(NotFoundError):
            service.verify(test_user_id, "alice123")

    def test_removed_profile_can_be_claimed_by_another_user(
        self, service, profile_client, test_user_id, other_user_id
    ):
        challenge = service.initiate(test_user_id, "alice123")
        profile_client.bios["alice123"] = challenge.verification_code
        service.verify(test_user_id, "alice123")
        service.remove(test_user_id)

        assert service.initiate(other_user_id, "alice123").verification_code
