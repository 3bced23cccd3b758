"""
Tests for the REST API
"""
import pytest
from fastapi.testclient import TestClient

from referral_tracker.dependencies import get_storage
from referral_tracker.storage.memory import MemStorage

POSITION = {
    "title": "Backend Engineer",
    "company": "Acme",
    "location": "Tel Aviv",
    "description": "Build and run our APIs",
    "salary_min": 20000,
    "salary_max": 30000,
}

CANDIDATE = {
    "full_name": "Jane Doe",
    "email": "jane@example.com",
    "phone": "050-0000000",
    "current_role": "Software Engineer",
    "skills": "Python, SQL",
    "experience": 5,
    "availability": "2weeks",
}


@pytest.fixture
def api_storage():
    return MemStorage()


@pytest.fixture
def client(api_storage):
    """Test client wired to a fresh in-memory repository"""
    # Import app here so that conftest's environment defaults apply first
    from referral_tracker.app import app

    app.dependency_overrides[get_storage] = lambda: api_storage
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def referral(client):
    """A candidate referred to a position, created through the API"""
    candidate = client.post("/api/candidates", json=CANDIDATE).json()
    position = client.post("/api/positions", json=POSITION).json()
    response = client.post("/api/referrals", json={
        "candidate_id": candidate["id"],
        "position_id": position["id"],
    })
    assert response.status_code == 201
    return response.json()


class TestPositionsAPI:

    def test_create(self, client):
        response = client.post("/api/positions", json=POSITION)

        assert response.status_code == 201
        data = response.json()
        assert data["id"] == 1
        assert data["status"] == "Open"
        assert data["date_added"] is not None

    def test_list_and_get(self, client):
        client.post("/api/positions", json=POSITION)

        assert len(client.get("/api/positions").json()) == 1
        assert client.get("/api/positions/1").json()["title"] == "Backend Engineer"

    def test_get_missing(self, client):
        response = client.get("/api/positions/99")

        assert response.status_code == 404
        assert response.json()["detail"] == "Position 99 not found"

    def test_invalid_status_rejected(self, client):
        response = client.post("/api/positions", json={**POSITION, "status": "Paused"})

        assert response.status_code == 422

    def test_partial_update(self, client):
        client.post("/api/positions", json=POSITION)

        response = client.put("/api/positions/1", json={"status": "Closed"})

        assert response.status_code == 200
        assert response.json()["status"] == "Closed"
        assert response.json()["title"] == "Backend Engineer"

    def test_null_for_required_field_rejected(self, client):
        client.post("/api/positions", json=POSITION)

        response = client.put("/api/positions/1", json={"title": None})

        assert response.status_code == 422

    def test_update_missing(self, client):
        assert client.put("/api/positions/99", json={"title": "X"}).status_code == 404

    def test_delete(self, client):
        client.post("/api/positions", json=POSITION)

        assert client.delete("/api/positions/1").status_code == 204
        assert client.get("/api/positions/1").status_code == 404
        assert client.delete("/api/positions/1").status_code == 404

    def test_delete_referenced_position_conflicts(self, client, referral):
        response = client.delete(f"/api/positions/{referral['position_id']}")

        assert response.status_code == 409
        assert client.get(f"/api/positions/{referral['position_id']}").status_code == 200


class TestCandidatesAPI:

    def test_create(self, client):
        response = client.post("/api/candidates", json=CANDIDATE)

        assert response.status_code == 201
        assert response.json()["status"] == "Looking"

    def test_negative_experience_rejected(self, client):
        response = client.post("/api/candidates", json={**CANDIDATE, "experience": -1})

        assert response.status_code == 422

    def test_delete_referenced_candidate_conflicts(self, client, referral):
        response = client.delete(f"/api/candidates/{referral['candidate_id']}")

        assert response.status_code == 409


class TestReferralsAPI:

    def test_create_starts_as_referred(self, client, referral):
        assert referral["status"] == "Referred"
        assert referral["fee_earned"] is None
        assert referral["mode"] == "Placement"
        assert referral["fee_type"] == "OneTime"

    def test_create_with_missing_candidate(self, client):
        client.post("/api/positions", json=POSITION)

        response = client.post("/api/referrals", json={"candidate_id": 42, "position_id": 1})

        assert response.status_code == 404
        assert response.json()["detail"] == "Candidate 42 not found"

    def test_list_includes_details(self, client, referral):
        data = client.get("/api/referrals").json()

        assert len(data) == 1
        assert data[0]["candidate"]["full_name"] == "Jane Doe"
        assert data[0]["position"]["company"] == "Acme"

    def test_get(self, client, referral):
        data = client.get(f"/api/referrals/{referral['id']}").json()

        assert data["candidate"]["email"] == "jane@example.com"
        assert client.get("/api/referrals/99").status_code == 404

    def test_hire_places_candidate(self, client, referral):
        response = client.put(
            f"/api/referrals/{referral['id']}",
            json={"status": "Hired", "fee_earned": 25000}
        )

        assert response.status_code == 200
        assert response.json()["status"] == "Hired"
        candidate = client.get(f"/api/candidates/{referral['candidate_id']}").json()
        assert candidate["status"] == "Placed"

        activities = client.get("/api/activities", params={"limit": 2}).json()
        assert [a["type"] for a in activities] == ["candidate_updated", "referral_updated"]
        assert activities[1]["description"] == "Received referral fee: ₪25000 for Jane Doe"

    def test_fee_with_non_hired_status_rejected(self, client, referral):
        response = client.put(
            f"/api/referrals/{referral['id']}",
            json={"status": "Rejected", "fee_earned": 100}
        )

        assert response.status_code == 422

    def test_fee_without_hired_status_rejected(self, client, referral):
        response = client.put(f"/api/referrals/{referral['id']}", json={"fee_earned": 500})

        assert response.status_code == 422
        stored = client.get(f"/api/referrals/{referral['id']}").json()
        assert stored["status"] == "Referred"
        assert stored["fee_earned"] is None

    def test_leaving_hired_clears_fee(self, client, referral):
        client.put(f"/api/referrals/{referral['id']}", json={"status": "Hired", "fee_earned": 25000})

        response = client.put(f"/api/referrals/{referral['id']}", json={"status": "Rejected"})

        assert response.status_code == 200
        assert response.json()["fee_earned"] is None
        assert client.get("/api/dashboard/stats").json()["fees_earned"] == 0
        candidate = client.get(f"/api/candidates/{referral['candidate_id']}").json()
        assert candidate["status"] == "Placed"

    def test_update_to_missing_position(self, client, referral):
        response = client.put(f"/api/referrals/{referral['id']}", json={"position_id": 99})

        assert response.status_code == 404

    def test_delete(self, client, referral):
        assert client.delete(f"/api/referrals/{referral['id']}").status_code == 204
        assert client.delete(f"/api/referrals/{referral['id']}").status_code == 404
        assert client.delete(f"/api/candidates/{referral['candidate_id']}").status_code == 204


class TestDashboardAPI:

    def test_stats(self, client, referral):
        client.put(f"/api/referrals/{referral['id']}", json={"status": "Hired", "fee_earned": 25000})

        stats = client.get("/api/dashboard/stats").json()

        assert stats["open_positions"] == 1
        assert stats["active_candidates"] == 0
        assert stats["referrals_made"] == 1
        assert stats["fees_earned"] == 25000
        assert stats["monthly_change"]["referrals_made"] == 1

    def test_activities_newest_first(self, client, referral):
        activities = client.get("/api/activities").json()

        assert [a["type"] for a in activities] == ["referral_created", "position_added", "candidate_added"]

    def test_activities_limit_must_be_positive(self, client):
        assert client.get("/api/activities", params={"limit": 0}).status_code == 422
