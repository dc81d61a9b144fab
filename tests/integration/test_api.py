"""Integration tests for the FastAPI layer."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text

from stellar_nexus.api.app import create_app
from stellar_nexus.api.runtime import ApiState
from stellar_nexus.config import Settings


def _make_app():
    def factory() -> ApiState:
        settings = Settings(DATABASE_URL="sqlite:///:memory:", rng_seed="api-tests")
        return ApiState(settings=settings)

    app = create_app(state_factory=factory)
    transport = ASGITransport(app=app)
    return app, transport


async def _register(client: AsyncClient, discord_id: str, username: str) -> dict:
    response = await client.post(
        "/users/register", json={"discord_id": discord_id, "username": username}
    )
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_commander_lifecycle_via_api():
    app, transport = _make_app()

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        response = await client.get("/health")
        assert response.status_code == 200
        payload = response.json()
        assert payload["status"] == "ok"
        assert payload["database"] is True

        user = await _register(client, "100", "nova")
        assert (user["credits"], user["nexium"], user["level"]) == (1000, 25, 1)

        response = await client.post(
            "/users/register", json={"discord_id": "100", "username": "copy"}
        )
        assert response.status_code == 409
        assert response.json()["code"] == "ALREADY_REGISTERED"

        response = await client.get("/users/100")
        assert response.status_code == 200
        assert response.json()["id"] == user["id"]

        response = await client.get("/users/missing")
        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

        response = await client.get(f"/users/{user['id']}/ships")
        ships = response.json()
        assert len(ships) == 1
        assert ships[0]["variant"] == "Swiftwing"
        assert ships[0]["id"] == user["active_ship_id"]

        response = await client.post(
            f"/users/{user['id']}/explore", json={"exploration_type": "fishing"}
        )
        assert response.status_code == 200
        exploration = response.json()
        assert exploration["rewards"]
        assert exploration["experience"]["experience_gained"] > 0

        response = await client.get(f"/users/{user['id']}/explorations")
        assert [row["id"] for row in response.json()] == [exploration["exploration_id"]]

        response = await client.post(
            f"/users/{user['id']}/explore", json={"exploration_type": "mining"}
        )
        assert response.status_code == 422
        assert response.json()["code"] == "INVALID_REQUEST"

        response = await client.post(
            f"/users/{user['id']}/combat/pve", json={"enemy_type": "pirate"}
        )
        assert response.status_code == 200
        combat = response.json()
        assert combat["enemy"]["name"] == "Space Pirate"
        assert combat["ship_health"] == 100 - combat["defender_damage"]

        response = await client.get(f"/users/{user['id']}/combat", params={"limit": 5})
        assert response.json()[0]["id"] == combat["combat_log_id"]

        response = await client.get(f"/users/{user['id']}/combat", params={"limit": 500})
        assert response.status_code == 422


@pytest.mark.asyncio
async def test_pvp_and_fleet_errors_via_api():
    app, transport = _make_app()

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        attacker = await _register(client, "1", "nova")
        defender = await _register(client, "2", "vega")

        response = await client.post(
            f"/users/{attacker['id']}/combat/pvp", json={"defender_id": defender["id"]}
        )
        assert response.status_code == 200
        duel = response.json()
        assert duel["winner_id"] in (attacker["id"], defender["id"])
        assert {duel["attacker"]["user_id"], duel["defender"]["user_id"]} == {
            attacker["id"],
            defender["id"],
        }

        response = await client.post(
            f"/users/{attacker['id']}/combat/pvp", json={"defender_id": attacker["id"]}
        )
        assert response.status_code == 409
        assert response.json()["code"] == "CANNOT_SELF_ATTACK"

        response = await client.post(
            f"/users/{attacker['id']}/ships/purchase", json={"ship_type": "flagship"}
        )
        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "INSUFFICIENT_CREDITS"
        assert body["retryable"] is False

        response = await client.post(
            f"/users/{defender['id']}/ships/upgrade",
            json={"ship_id": attacker["active_ship_id"]},
        )
        assert response.status_code == 404

        response = await client.get("/ships/catalog")
        assert response.json()["flagship"]["base_price"] == 25000


@pytest.mark.asyncio
async def test_market_and_crafting_via_api():
    app, transport = _make_app()

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        user = await _register(client, "300", "orion")

        response = await client.get("/market/items")
        items = {item["name"]: item for item in response.json()}
        assert items["Hyperspace Fuel"]["available"] == 100

        response = await client.post(
            "/market/buy",
            json={"user_id": user["id"], "item_name": "Hyperspace Fuel", "quantity": 2},
        )
        assert response.status_code == 200
        purchase = response.json()
        assert purchase["total_price"] == 2 * items["Hyperspace Fuel"]["price"]
        assert purchase["resource"]["quantity"] == 2

        response = await client.get("/market/items")
        stock = {item["name"]: item["available"] for item in response.json()}
        assert stock["Hyperspace Fuel"] == 98

        response = await client.post(
            "/market/buy",
            json={"user_id": user["id"], "item_name": "Plasma Cannon", "quantity": 1},
        )
        assert response.status_code == 400
        assert response.json()["code"] == "INSUFFICIENT_CREDITS"

        response = await client.get(f"/users/{user['id']}/resources")
        ore = next(r for r in response.json() if r["name"] == "Iron Ore")
        response = await client.post(
            "/market/sell",
            json={
                "user_id": user["id"],
                "resource_id": ore["id"],
                "quantity": 4,
                "price_per_unit": 12,
            },
        )
        assert response.status_code == 200
        assert response.json()["remaining"] == 6

        response = await client.get("/market/history")
        history = response.json()
        assert [row["item_name"] for row in history] == ["Iron Ore", "Hyperspace Fuel"]

        response = await client.get("/recipes")
        recipes = response.json()
        assert len(recipes) == 55

        response = await client.post(f"/users/{user['id']}/craft", json={"recipe_id": 99999})
        assert response.status_code == 404

        response = await client.get("/market/deals", params={"level": 3})
        assert 2 <= len(response.json()) <= 4


@pytest.mark.asyncio
async def test_guilds_and_alliances_via_api():
    app, transport = _make_app()

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        user = await _register(client, "400", "lyra")

        response = await client.get("/guilds")
        guilds = response.json()
        assert len(guilds) == 4
        guild = guilds[0]

        response = await client.post(
            f"/users/{user['id']}/guild/join", json={"guild_id": guild["id"]}
        )
        joined = response.json()
        assert joined["success"] is True
        assert joined["message"] == f"Welcome to {guild['name']}!"
        assert joined["guild"]["member_count"] == 2

        response = await client.post(
            f"/users/{user['id']}/guild/join", json={"guild_id": guild["id"]}
        )
        assert response.status_code == 200
        assert response.json()["reason"] == "ALREADY_IN_GUILD"

        response = await client.post(
            f"/users/{user['id']}/guild/contribute",
            json={"resource_type": "credits", "amount": 500},
        )
        assert response.status_code == 200
        contribution = response.json()
        assert contribution["guild_experience"] == 50
        assert contribution["personal_experience"] == 25

        response = await client.get("/guilds/rankings")
        rankings = response.json()
        assert rankings[0]["guild"]["id"] == guild["id"]
        assert rankings[0]["power"] == 100 + 2 * 10 + 50

        response = await client.get(f"/guilds/{guild['id']}/members")
        assert [member["id"] for member in response.json()] == [user["id"]]

        response = await client.post(f"/users/{user['id']}/guild/leave")
        assert response.json()["member_count"] == 1

        response = await client.post(f"/users/{user['id']}/guild/leave")
        assert response.status_code == 409
        assert response.json()["code"] == "NOT_IN_GUILD"

        response = await client.post(
            f"/users/{user['id']}/alliances", json={"name": "Iron Pact"}
        )
        assert response.status_code == 201
        alliance = response.json()
        assert alliance["fleet_power"] == 260

        rival = await _register(client, "401", "draco")
        response = await client.post(
            f"/users/{rival['id']}/alliances", json={"name": "Iron Pact"}
        )
        assert response.status_code == 409
        assert response.json()["code"] == "ALLIANCE_NAME_TAKEN"

        response = await client.get(f"/alliances/{alliance['id']}/members")
        assert [member["id"] for member in response.json()] == [user["id"]]


@pytest.mark.asyncio
async def test_database_outage_is_retryable():
    app, transport = _make_app()

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        with app.state.api_state.db_engine.begin() as connection:
            connection.execute(text("DROP TABLE guilds"))

        response = await client.get("/guilds")

        assert response.status_code == 503
        assert response.json() == {
            "detail": "the game database is temporarily unavailable",
            "code": "TRANSIENT",
            "retryable": True,
        }
