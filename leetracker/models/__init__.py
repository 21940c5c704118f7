"""Data models for LeeTracker."""

from leetracker.models.user import User, UserProfile
from leetracker.models.problem import Problem
from leetracker.models.vocabulary import VocabularyEntry, VocabularyDetail
from leetracker.models.daily_summary import DailySummary
from leetracker.models.verification import ProfileVerification, VerificationStatus, VerificationChallenge
from leetracker.models.analytics import (
    BreakdownEntry,
    Overview,
    UserAnalytics,
    PlatformAnalytics,
    LeaderboardEntry,
    UserStats,
)

__all__ = [
    "User",
    "UserProfile",
    "Problem",
    "VocabularyEntry",
    "VocabularyDetail",
    "DailySummary",
    "ProfileVerification",
    "VerificationStatus",
    "VerificationChallenge",
    "BreakdownEntry",
    "Overview",
    "UserAnalytics",
    "PlatformAnalytics",
    "LeaderboardEntry",
    "UserStats",
]
