"""LeetCode public profile lookup for LeeTracker."""

import logging
import os
from typing import Optional
import requests
from dotenv import load_dotenv

from leetracker.errors import ExternalLookupError

load_dotenv()

logger = logging.getLogger(__name__)

LEETCODE_GRAPHQL_URL = os.getenv("LEETCODE_GRAPHQL_URL", "https://leetcode.com/graphql")
LEETCODE_TIMEOUT_SEC = float(os.getenv("LEETCODE_TIMEOUT_SEC", "10"))

PROFILE_BIO_QUERY = """
query userPublicProfile($username: String!) {
  matchedUser(username: $username) {
    username
    profile {
      aboutMe
    }
  }
}
"""


class LeetCodeClient:
    """Client for reading public LeetCode profile data."""

    def __init__(self, graphql_url: Optional[str] = None, timeout: Optional[float] = None):
        """Initialize LeetCode client.

        Args:
            graphql_url: GraphQL endpoint. If None, reads from LEETCODE_GRAPHQL_URL env var.
            timeout: Request timeout in seconds. If None, reads from LEETCODE_TIMEOUT_SEC env var.
        """
        self.graphql_url = graphql_url or LEETCODE_GRAPHQL_URL
        self.timeout = timeout if timeout is not None else LEETCODE_TIMEOUT_SEC
        self.headers = {
            "Content-Type": "application/json",
            "Referer": "https://leetcode.com",
        }

    def fetch_profile(self, username: str) -> Optional[dict]:
        """Fetch the public profile of a LeetCode user.

        Returns:
            The `matchedUser` object, or None if no such user exists

        Raises:
            ExternalLookupError: If the request fails or the response is unreadable
        """
        payload = {
            "query": PROFILE_BIO_QUERY,
            "variables": {"username": username},
            "operationName": "userPublicProfile",
        }

        try:
            response = requests.post(
                self.graphql_url,
                json=payload,
                headers=self.headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            body = response.json()
        except requests.RequestException as e:
            logger.warning(f"LeetCode profile lookup failed for {username}: {type(e).__name__}: {str(e)}")
            raise ExternalLookupError("Failed to verify profile. Please try again later.") from e
        except ValueError as e:
            logger.warning(f"LeetCode returned a non-JSON response for {username}")
            raise ExternalLookupError("Failed to verify profile. Please try again later.") from e

        data = body.get("data") or {}
        return data.get("matchedUser")

    def fetch_bio(self, username: str) -> Optional[str]:
        """Return the profile biography ("aboutMe") text.

        Returns:
            The bio text ("" if the profile has none), or None if the user does not exist
        """
        profile = self.fetch_profile(username)
        if profile is None:
            return None
        return (profile.get("profile") or {}).get("aboutMe") or ""
