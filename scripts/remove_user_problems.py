"""Remove every solved-problem record belonging to one user.

Used to clear out test data submitted while developing the browser extension.
Lists the user's problems first and asks for confirmation before deleting.

Usage:
    python scripts/remove_user_problems.py <username>
"""

import sys

from leetracker.database.database import SessionLocal, init_db
from leetracker.database.repository import ProblemRepository
from leetracker.database.user_repository import UserRepository


def remove_user_problems(username: str, confirm=input) -> int:
    """Delete all of `username`'s problems after confirmation; returns the number deleted."""
    db = SessionLocal()

    try:
        user = UserRepository(db).get_by_username(username)
        if not user:
            print(f"User '{username}' not found.")
            return 0

        problems = ProblemRepository(db)
        records = problems.get_all_for_user(user.id)
        if not records:
            print(f"User '{username}' has no problems.")
            return 0

        print(f"Found {len(records)} problems for '{username}':")
        for problem in records:
            print(f"  #{problem.leetcode_id} {problem.title} ({problem.difficulty}, {problem.solved_at:%Y-%m-%d})")
        print()

        response = confirm("Delete all of these problems? (yes/no): ")
        if response.lower() not in ["yes", "y"]:
            print("Aborted.")
            return 0

        deleted = sum(1 for problem in records if problems.delete(problem.id))
        print(f"Deleted {deleted} problems.")
        return deleted
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(1)

    init_db()
    remove_user_problems(sys.argv[1])
