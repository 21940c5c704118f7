"""LeetCode profile verification routes."""

from fastapi import APIRouter, Depends

from leetracker.api.dependencies import get_verification_service
from leetracker.api.request_models import RemoveVerificationRequest, VerificationRequest
from leetracker.api.responses import api_response
from leetracker.verification.workflow import ProfileVerificationService

router = APIRouter(prefix="/verification", tags=["Verification"])


@router.post("/initiate")
def initiate_verification(
    request: VerificationRequest,
    service: ProfileVerificationService = Depends(get_verification_service),
):
    challenge = service.initiate(request.user_id, request.leetcode_username)
    return api_response(challenge, "Verification initiated successfully")


@router.post("/verify")
def verify_profile(
    request: VerificationRequest,
    service: ProfileVerificationService = Depends(get_verification_service),
):
    """Check the issued code against the LeetCode bio and link the profile."""
    verification = service.verify(request.user_id, request.leetcode_username)
    return api_response(
        {"verified": True, "leetcodeUsername": verification.leetcode_username},
        "Profile verified successfully",
    )


@router.get("/status/{user_id}")
def verification_status(
    user_id: str,
    service: ProfileVerificationService = Depends(get_verification_service),
):
    return api_response(service.status(user_id), "Verification status retrieved successfully")


@router.delete("/remove")
def remove_verification(
    request: RemoveVerificationRequest,
    service: ProfileVerificationService = Depends(get_verification_service),
):
    service.remove(request.user_id)
    return api_response(None, "Verification removed successfully")
