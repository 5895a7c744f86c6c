"""Integration tests for the dashboard statistics endpoint."""

import pytest

from tests.conftest import make_candidate_payload, make_position_payload

pytestmark = pytest.mark.integration

API = "/api/dashboard/stats"


async def test_stats_empty(client):
    resp = await client.get(API)

    assert resp.status_code == 200
    assert resp.json() == {
        "totalPositions": 0,
        "totalCandidates": 0,
        "inReview": 0,
        "shortlisted": 0,
    }


async def test_stats_counts(client):
    for title in ("Backend Developer", "Product Manager"):
        await client.post("/api/positions", json=make_position_payload(title=title))
    for status in ("New", "In Review", "In Review", "Shortlisted"):
        await client.post("/api/candidates", json=make_candidate_payload(status=status))

    resp = await client.get(API)

    assert resp.json() == {
        "totalPositions": 2,
        "totalCandidates": 4,
        "inReview": 2,
        "shortlisted": 1,
    }


async def test_stats_recomputed_after_changes(client):
    created = (await client.post("/api/candidates", json=make_candidate_payload())).json()
    await client.put(f"/api/candidates/{created['id']}", json={"status": "In Review"})

    assert (await client.get(API)).json()["inReview"] == 1

    await client.delete(f"/api/candidates/{created['id']}")

    body = (await client.get(API)).json()
    assert body["inReview"] == 0
    assert body["totalCandidates"] == 0
