"""Tests for match simulation API routes."""

import httpx
import pytest

from rift_sim.main import app

pytestmark = pytest.mark.anyio


@pytest.fixture
async def client(repository):
    """Async test client backed by the in-memory repository."""
    # Set repository directly on app.state (mimics lifespan startup)
    app.state.repository = repository

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "rift-sim"}


async def test_root(client):
    response = await client.get("/")
    assert response.json()["docs"] == "/docs"


async def test_list_teams(client):
    response = await client.get("/api/matches/teams")
    assert response.status_code == 200
    assert response.json() == {"teams": ["Blue Team", "Red Team"]}


async def test_roster(client):
    response = await client.get("/api/matches/teams/Blue Team/roster")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Blue Team"
    assert [p["role"] for p in data["players"]] == ["top", "jungle", "mid", "bot", "support"]


async def test_roster_unknown_team_404(client):
    response = await client.get("/api/matches/teams/Nobody/roster")
    assert response.status_code == 404


async def test_champions_filtered_by_role(client):
    response = await client.get("/api/matches/champions", params={"role": "support"})
    champions = response.json()["champions"]
    assert len(champions) == 14
    assert all(c["role"] == "support" for c in champions)


async def test_series_is_reproducible_with_seed(client):
    body = {"team_a": "Blue Team", "team_b": "Red Team", "seed": 11}
    first = (await client.post("/api/matches/series", json=body)).json()
    second = (await client.post("/api/matches/series", json=body)).json()

    assert first["format"] == "BO3"
    assert first["winner"] in ("Blue Team", "Red Team")
    assert first["score"] == second["score"]
    assert [h["summary"] for h in first["history"]] == [h["summary"] for h in second["history"]]
    assert set(first["history"][0]["picks"]) == {"A", "B"}
    assert "logs" in first["history"][0]


async def test_series_without_logs(client):
    body = {"team_a": "Blue Team", "team_b": "Red Team", "seed": 2, "series_format": "BO5", "include_logs": False}
    data = (await client.post("/api/matches/series", json=body)).json()

    assert data["format"] == "BO5"
    assert data["series_mvp"] is not None
    assert all("logs" not in h for h in data["history"])


async def test_set_endpoint(client):
    body = {"blue_team": "Red Team", "red_team": "Blue Team", "set_number": 2, "seed": 4}
    response = await client.post("/api/matches/set", json=body)
    assert response.status_code == 200
    data = response.json()

    assert data["blue_team"] == "Red Team"
    assert data["set_number"] == 2
    assert len(data["picks"]["blue"]) == 5
    assert len(data["used_champions"]) == 10
    assert data["event_log"][0] == "========== [ DRAFT ] =========="
    assert data["pog"]["team"] == data["winner"]


async def test_quick_endpoint(client):
    body = {"team_a": "Blue Team", "team_b": "Red Team", "seed": 8}
    data = (await client.post("/api/matches/quick", json=body)).json()
    assert max(int(n) for n in data["score"].split(":")) == 2
    assert data["history"][0]["logs"][0].startswith("[SIM] Set 1")


async def test_strict_unknown_team_404(client):
    body = {"team_a": "Blue Team", "team_b": "Ghosts", "strict": True}
    response = await client.post("/api/matches/series", json=body)
    assert response.status_code == 404
    assert response.json()["detail"] == "Team not found: Ghosts"


async def test_lenient_unknown_team_uses_placeholders(client):
    body = {"blue_team": "Blue Team", "red_team": "Ghosts", "seed": 1}
    data = (await client.post("/api/matches/set", json=body)).json()
    assert all(p["player"].startswith("Ghosts ") for p in data["picks"]["red"])


@pytest.mark.parametrize("path", ["/api/matches/series", "/api/matches/quick"])
async def test_same_team_400(client, path):
    response = await client.post(path, json={"team_a": "Blue Team", "team_b": "Blue Team"})
    assert response.status_code == 400


@pytest.mark.parametrize(
    "path, body",
    [
        ("/api/matches/series", {"team_a": "Blue Team", "team_b": "Red Team", "series_format": "BO7"}),
        ("/api/matches/series", {"team_a": "Blue Team", "team_b": "Red Team", "difficulty": "brutal"}),
        ("/api/matches/set", {"blue_team": "Blue Team", "red_team": "Red Team", "set_number": 6}),
    ],
)
async def test_invalid_requests_422(client, path, body):
    response = await client.post(path, json=body)
    assert response.status_code == 422
