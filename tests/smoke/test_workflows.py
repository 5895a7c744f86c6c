"""End-to-end workflow tests that exercise multi-step scenarios."""

import pytest

from tests.conftest import make_candidate_payload, make_position_payload

pytestmark = pytest.mark.smoke


async def test_hiring_pipeline(client):
    """Open position → candidates apply → review → shortlist → dashboard → close position."""
    # 1. Open a position
    resp = await client.post("/api/positions", json=make_position_payload(title="Backend Developer"))
    assert resp.status_code == 201
    position = resp.json()

    # 2. Two candidates apply
    applicants = []
    for name, email in (("John Doe", "john@example.com"), ("Jane Roe", "jane@example.com")):
        resp = await client.post(
            "/api/candidates",
            json=make_candidate_payload(
                name=name, email=email, positionApplied=position["title"], positionId=position["id"]
            ),
        )
        assert resp.status_code == 201
        applicants.append(resp.json())
    john, jane = applicants

    # 3. Move John to review, shortlist Jane
    resp = await client.put(f"/api/candidates/{john['id']}", json={"status": "In Review"})
    assert resp.json()["status"] == "In Review"
    resp = await client.put(f"/api/candidates/{jane['id']}", json={"status": "Shortlisted"})
    assert resp.json()["status"] == "Shortlisted"

    # 4. Filter the pipeline for this position
    resp = await client.get(
        "/api/candidates", params={"position": "Backend Developer", "status": "Shortlisted"}
    )
    assert [c["name"] for c in resp.json()] == ["Jane Roe"]

    # 5. Dashboard reflects the pipeline
    resp = await client.get("/api/dashboard/stats")
    assert resp.json() == {
        "totalPositions": 1,
        "totalCandidates": 2,
        "inReview": 1,
        "shortlisted": 1,
    }

    # 6. Close then delete the position; candidates keep their references
    resp = await client.put(f"/api/positions/{position['id']}", json={"status": "Closed"})
    assert resp.json()["status"] == "Closed"
    resp = await client.delete(f"/api/positions/{position['id']}")
    assert resp.status_code == 204

    resp = await client.get("/api/candidates", params={"search": "roe"})
    remaining = resp.json()
    assert [c["positionId"] for c in remaining] == [position["id"]]
    assert (await client.get("/api/dashboard/stats")).json()["totalPositions"] == 0
