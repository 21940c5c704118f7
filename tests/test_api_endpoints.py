"""Integration tests for API endpoints.

These tests verify API endpoints work correctly end-to-end.
"""

import re
from datetime import date, datetime, timedelta
from unittest.mock import patch

from leetracker.database.models import DailySummaryDB

CODE_PATTERN = re.compile(r"^leetracker-[a-z0-9]{6}-\d+$")


def _create_problem(test_client, user_id, **overrides):
    payload = {
        "title": "Two Sum",
        "leetcodeId": 1,
        "userId": user_id,
        "difficultyLevel": "Easy",
        "languageName": "Python",
        "timeSpentMin": 15,
        "tagNames": ["Array", "Hash Table"],
    }
    payload.update(overrides)
    return test_client.post("/problems", json=payload)


class TestEnvelope:
    """Test the shared response envelope and error mapping."""

    def test_health(self, test_client):
        response = test_client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_unknown_route_uses_envelope(self, test_client):
        response = test_client.get("/does-not-exist")
        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["data"] is None

    def test_invalid_body_is_400(self, test_client):
        response = test_client.post("/problems", json={"title": "Two Sum"})
        assert response.status_code == 400
        assert response.json()["success"] is False


class TestUserEndpoints:
    """Test user endpoints."""

    def test_get_or_create_user(self, test_client):
        first = test_client.post("/users", json={"username": "alice"})
        second = test_client.post("/users", json={"username": "alice"})

        assert first.status_code == 200
        body = first.json()
        assert body["success"] is True
        assert body["data"]["username"] == "alice"
        assert body["data"]["problems"] == []
        assert body["data"]["dailySummaries"] == []
        assert second.json()["data"]["id"] == body["data"]["id"]

    def test_user_stats(self, test_client, test_user_id):
        _create_problem(test_client, test_user_id, solvedAt=datetime.now().isoformat())
        _create_problem(test_client, test_user_id, difficultyLevel="Hard", timeSpentMin=45)

        response = test_client.get(f"/users/{test_user_id}/stats")
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["overview"]["totalProblems"] == 2
        assert data["overview"]["totalTimeSpent"] == 60
        assert data["overview"]["averageTimePerProblem"] == 30
        assert set(data["difficultyBreakdown"]) == {"Easy", "Hard"}
        assert data["streak"] >= 1
        assert data["lastSolved"] is not None
        assert data["recentSummaries"] == []

    def test_user_stats_unknown_user(self, test_client):
        response = test_client.get("/users/missing/stats")
        assert response.status_code == 404
        assert response.json()["message"] == "User not found"


class TestProblemEndpoints:
    """Test problem CRUD endpoints."""

    def test_create_problem(self, test_client, test_user_id):
        response = _create_problem(test_client, test_user_id)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["title"] == "Two Sum"
        assert data["leetcodeId"] == 1
        assert data["difficulty"] == "Easy"
        assert data["tags"] == ["Array", "Hash Table"]
        assert data["timeSpentMin"] == 15

    def test_create_problem_rejects_bad_input(self, test_client, test_user_id):
        assert _create_problem(test_client, test_user_id, timeSpentMin=0).status_code == 400
        assert _create_problem(test_client, test_user_id, difficultyLevel="Trivial").status_code == 400
        assert _create_problem(test_client, "missing-user").status_code == 404

    def test_get_update_delete_problem(self, test_client, test_user_id):
        problem_id = _create_problem(test_client, test_user_id).json()["data"]["id"]

        assert test_client.get(f"/problems/{problem_id}").status_code == 200

        updated = test_client.put(f"/problems/{problem_id}", json={"title": "Two Sum II", "tagNames": ["Two Pointers"]})
        assert updated.status_code == 200
        assert updated.json()["data"]["title"] == "Two Sum II"
        assert updated.json()["data"]["tags"] == ["Two Pointers"]

        deleted = test_client.delete(f"/problems/{problem_id}")
        assert deleted.status_code == 200
        assert deleted.json()["data"] is None
        assert test_client.get(f"/problems/{problem_id}").status_code == 404
        assert test_client.delete(f"/problems/{problem_id}").status_code == 404

    def test_update_missing_problem(self, test_client):
        assert test_client.put("/problems/missing", json={"title": "X"}).status_code == 404

    def test_list_user_problems_with_pagination(self, test_client, test_user_id):
        now = datetime.utcnow()
        for i in range(3):
            _create_problem(
                test_client,
                test_user_id,
                title=f"P{i}",
                leetcodeId=i,
                solvedAt=(now - timedelta(days=i)).isoformat(),
            )

        response = test_client.get(f"/problems/user/{test_user_id}", params={"page": 1, "limit": 2})
        assert response.status_code == 200
        data = response.json()["data"]
        assert [p["title"] for p in data["problems"]] == ["P0", "P1"]
        assert data["pagination"] == {
            "currentPage": 1,
            "totalPages": 2,
            "totalProblems": 3,
            "hasNext": True,
            "hasPrev": False,
        }

    def test_list_user_problems_filter_by_tag(self, test_client, test_user_id):
        _create_problem(test_client, test_user_id, title="A", tagNames=["Graph"])
        _create_problem(test_client, test_user_id, title="B", tagNames=["Array"])

        response = test_client.get(f"/problems/user/{test_user_id}", params={"tag": "Graph"})
        assert [p["title"] for p in response.json()["data"]["problems"]] == ["A"]


class TestVocabularyEndpoints:
    """Test tag, language and difficulty endpoints."""

    def test_create_difficulty_twice(self, test_client):
        first = test_client.post("/difficulties", json={"level": "Easy"})
        second = test_client.post("/difficulties", json={"level": "Easy"})

        assert first.status_code == 201
        assert first.json()["data"]["name"] == "Easy"
        assert second.status_code == 409
        assert second.json()["success"] is False

    def test_create_invalid_difficulty(self, test_client):
        response = test_client.post("/difficulties", json={"level": "Impossible"})
        assert response.status_code == 400

    def test_initialize_difficulties(self, test_client):
        first = test_client.post("/difficulties/initialize")
        assert first.status_code == 201
        assert [d["name"] for d in first.json()["data"]] == ["Easy", "Medium", "Hard"]

        second = test_client.post("/difficulties/initialize")
        assert second.status_code == 200
        assert second.json()["data"] == []

    def test_tag_crud(self, test_client):
        created = test_client.post("/tags", json={"name": "Graph"})
        assert created.status_code == 201
        tag_id = created.json()["data"]["id"]

        renamed = test_client.put(f"/tags/{tag_id}", json={"name": "Graphs"})
        assert renamed.json()["data"]["name"] == "Graphs"

        detail = test_client.get(f"/tags/{tag_id}")
        assert detail.json()["data"]["problems"] == []
        assert detail.json()["data"]["problemCount"] == 0

        assert test_client.delete(f"/tags/{tag_id}").status_code == 200
        assert test_client.get(f"/tags/{tag_id}").status_code == 404

    def test_delete_tag_in_use_fails(self, test_client, test_user_id):
        _create_problem(test_client, test_user_id, tagNames=["Array"])
        tag = test_client.get("/tags").json()["data"][0]

        response = test_client.delete(f"/tags/{tag['id']}")
        assert response.status_code == 400
        assert "associated with 1 problem(s)" in response.json()["message"]
        assert test_client.get(f"/tags/{tag['id']}").status_code == 200

    def test_popular_languages(self, test_client, test_user_id):
        _create_problem(test_client, test_user_id, languageName="Java")
        _create_problem(test_client, test_user_id, languageName="Python")
        _create_problem(test_client, test_user_id, languageName="Python")

        response = test_client.get("/languages/popular", params={"limit": 1})
        assert response.status_code == 200
        assert [(l["name"], l["problemCount"]) for l in response.json()["data"]] == [("Python", 2)]


class TestDailySummaryEndpoints:
    """Test daily summary endpoints."""

    def test_upsert_summary(self, test_client, test_user_id):
        payload = {"userId": test_user_id, "date": "2024-05-15", "totalMinutes": 30}
        created = test_client.post("/daily-summaries", json=payload)
        updated = test_client.post("/daily-summaries", json={**payload, "totalMinutes": 50})

        assert created.status_code == 201
        assert updated.status_code == 200
        assert updated.json()["data"]["totalMinutes"] == 50
        assert updated.json()["data"]["date"] == "2024-05-15"

    def test_auto_calculate(self, test_client, test_user_id):
        _create_problem(test_client, test_user_id, solvedAt="2024-05-15T09:00:00", timeSpentMin=20)
        _create_problem(test_client, test_user_id, solvedAt="2024-05-15T23:30:00", timeSpentMin=25)
        _create_problem(test_client, test_user_id, solvedAt="2024-05-16T00:00:00", timeSpentMin=99)

        response = test_client.post(
            "/daily-summaries/auto-calculate", json={"userId": test_user_id, "date": "2024-05-15"}
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["summary"]["totalMinutes"] == 45
        assert data["problemsCount"] == 2
        assert len(data["problemsOnDate"]) == 2

    def test_problem_without_solved_at_counts_for_today(self, test_client, test_user_id):
        # Server clock 14 hours ahead of UTC: local "today" is not the UTC day.
        local_now = datetime(2024, 5, 15, 8, 0, 0)
        with patch("leetracker.database.repository.datetime") as mock_datetime:
            mock_datetime.now.return_value = local_now
            mock_datetime.utcnow.return_value = local_now - timedelta(hours=14)
            created = _create_problem(test_client, test_user_id, timeSpentMin=30)
        assert created.status_code == 201
        assert created.json()["data"]["solvedAt"].startswith("2024-05-15T08:00")

        response = test_client.post(
            "/daily-summaries/auto-calculate", json={"userId": test_user_id, "date": "2024-05-15"}
        )
        assert response.status_code == 200
        assert response.json()["data"]["summary"]["totalMinutes"] == 30

    def test_auto_calculate_empty_day_creates_nothing(self, test_client, test_user_id, db_session):
        response = test_client.post(
            "/daily-summaries/auto-calculate", json={"userId": test_user_id, "date": "2024-05-15"}
        )
        assert response.status_code == 404
        assert db_session.query(DailySummaryDB).count() == 0

    def test_list_get_and_delete(self, test_client, test_user_id):
        for day, minutes in (("2024-05-14", 20), ("2024-05-15", 25)):
            test_client.post("/daily-summaries", json={"userId": test_user_id, "date": day, "totalMinutes": minutes})

        listed = test_client.get(f"/daily-summaries/user/{test_user_id}").json()["data"]
        assert [s["date"] for s in listed["summaries"]] == ["2024-05-15", "2024-05-14"]
        assert listed["stats"] == {"totalDays": 2, "totalMinutes": 45, "averageMinutes": 22.5}

        by_date = test_client.get(f"/daily-summaries/user/{test_user_id}/date/2024-05-15")
        assert by_date.status_code == 200
        summary_id = by_date.json()["data"]["id"]

        assert test_client.delete(f"/daily-summaries/{summary_id}").status_code == 200
        assert test_client.get(f"/daily-summaries/user/{test_user_id}/date/2024-05-15").status_code == 404


class TestAnalyticsEndpoints:
    """Test analytics endpoints."""

    def test_user_analytics_with_range(self, test_client, test_user_id):
        _create_problem(test_client, test_user_id, solvedAt="2024-05-10T10:00:00", timeSpentMin=10)
        _create_problem(test_client, test_user_id, solvedAt="2024-05-20T10:00:00", timeSpentMin=20)

        response = test_client.get(
            f"/analytics/user/{test_user_id}",
            params={"startDate": "2024-05-15T00:00:00", "endDate": "2024-05-31T00:00:00"},
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["overview"]["totalProblems"] == 1
        assert data["overview"]["totalTimeSpent"] == 20
        assert data["topTags"]["Array"]["count"] == 1
        assert data["dateRange"]["startDate"].startswith("2024-05-15")

    def test_user_analytics_unknown_user(self, test_client):
        assert test_client.get("/analytics/user/missing").status_code == 404

    def test_platform_analytics(self, test_client, test_user_id):
        _create_problem(test_client, test_user_id, timeSpentMin=30)
        test_client.post("/users", json={"username": "bob"})

        overview = test_client.get("/analytics/platform").json()["data"]["overview"]
        assert overview == {
            "totalUsers": 2,
            "totalProblems": 1,
            "totalTimeSpent": 30,
            "averageProblemsPerUser": 0.5,
        }

    def test_leaderboard(self, test_client, test_user_id):
        bob_id = test_client.post("/users", json={"username": "bob"}).json()["data"]["id"]
        _create_problem(test_client, bob_id)
        _create_problem(test_client, bob_id)
        _create_problem(test_client, test_user_id)

        board = test_client.get("/analytics/leaderboard", params={"limit": 1}).json()["data"]
        assert board == [{"id": bob_id, "username": "bob", "problemCount": 2, "totalTimeSpent": 30}]


class TestVerificationEndpoints:
    """Test the verification flow end-to-end."""

    def test_full_verification_flow(self, test_client, test_user_id, profile_client):
        initiated = test_client.post(
            "/verification/initiate", json={"userId": test_user_id, "leetcodeUsername": "alice123"}
        )
        assert initiated.status_code == 200
        code = initiated.json()["data"]["verificationCode"]
        assert CODE_PATTERN.match(code)
        assert initiated.json()["data"]["instructions"]

        profile_client.bios["alice123"] = f"Grinding daily. {code}"
        verified = test_client.post(
            "/verification/verify", json={"userId": test_user_id, "leetcodeUsername": "alice123"}
        )
        assert verified.status_code == 200
        assert verified.json()["data"] == {"verified": True, "leetcodeUsername": "alice123"}

        status = test_client.get(f"/verification/status/{test_user_id}").json()["data"]
        assert status["hasVerifiedProfile"] is True
        assert status["verifiedUsername"] == "alice123"

        again = test_client.post(
            "/verification/verify", json={"userId": test_user_id, "leetcodeUsername": "alice123"}
        )
        assert again.status_code == 409
        assert "already verified" in again.json()["message"]

    def test_verify_before_initiate(self, test_client, test_user_id):
        response = test_client.post(
            "/verification/verify", json={"userId": test_user_id, "leetcodeUsername": "alice123"}
        )
        assert response.status_code == 404

    def test_verify_with_code_missing_from_bio(self, test_client, test_user_id, profile_client):
        test_client.post("/verification/initiate", json={"userId": test_user_id, "leetcodeUsername": "alice123"})
        profile_client.bios["alice123"] = "nothing here"

        response = test_client.post(
            "/verification/verify", json={"userId": test_user_id, "leetcodeUsername": "alice123"}
        )
        assert response.status_code == 400

    def test_verify_after_expiry(self, test_client, test_user_id, profile_client):
        code = test_client.post(
            "/verification/initiate", json={"userId": test_user_id, "leetcodeUsername": "alice123"}
        ).json()["data"]["verificationCode"]
        profile_client.bios["alice123"] = code

        later = datetime.utcnow() + timedelta(hours=25)
        with patch("leetracker.verification.workflow.datetime") as mock_datetime:
            mock_datetime.utcnow.return_value = later
            response = test_client.post(
                "/verification/verify", json={"userId": test_user_id, "leetcodeUsername": "alice123"}
            )

        assert response.status_code == 400
        assert "expired" in response.json()["message"]

    def test_initiate_missing_fields(self, test_client, test_user_id):
        response = test_client.post("/verification/initiate", json={"userId": test_user_id})
        assert response.status_code == 400

    def test_second_user_blocked(self, test_client, test_user_id, profile_client):
        code = test_client.post(
            "/verification/initiate", json={"userId": test_user_id, "leetcodeUsername": "alice123"}
        ).json()["data"]["verificationCode"]
        profile_client.bios["alice123"] = code
        test_client.post("/verification/verify", json={"userId": test_user_id, "leetcodeUsername": "alice123"})

        bob_id = test_client.post("/users", json={"username": "bob"}).json()["data"]["id"]
        response = test_client.post("/verification/initiate", json={"userId": bob_id, "leetcodeUsername": "alice123"})
        assert response.status_code == 409

    def test_remove_verification(self, test_client, test_user_id, profile_client):
        code = test_client.post(
            "/verification/initiate", json={"userId": test_user_id, "leetcodeUsername": "alice123"}
        ).json()["data"]["verificationCode"]
        profile_client.bios["alice123"] = code
        test_client.post("/verification/verify", json={"userId": test_user_id, "leetcodeUsername": "alice123"})

        removed = test_client.request("DELETE", "/verification/remove", json={"userId": test_user_id})
        assert removed.status_code == 200

        status = test_client.get(f"/verification/status/{test_user_id}").json()["data"]
        assert status["hasVerifiedProfile"] is False
        assert status["verifiedUsername"] is None

    def test_status_unknown_user(self, test_client):
        assert test_client.get("/verification/status/missing").status_code == 404
