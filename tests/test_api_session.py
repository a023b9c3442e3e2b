"""Tests for session API endpoints."""

from httpx import AsyncClient

from encounterforge.services.session_store import get_session_store


async def _load(client: AsyncClient, user_id: str, pack: str, chapter: int) -> dict:
    response = await client.post(
        f"/session/{user_id}/preset", json={"pack": pack, "chapter": chapter}
    )
    assert response.status_code == 200
    return response.json()


class TestGetSession:
    async def test_new_session_starts_from_default_preset(self, client: AsyncClient) -> None:
        response = await client.get("/session/user-1")

        assert response.status_code == 200
        data = response.json()
        assert data["user_id"] == "user-1"
        assert data["expansions"] == ["Core"]
        assert data["active_preset"] == {"pack": "Core", "chapter": 1, "name": "The Graveyard"}
        assert len(data["slots"]) == 3
        assert len(data["output"]) == 2
        assert data["warning"] is None
        assert "user-1" in get_session_store()

    async def test_rendered_output(self, client: AsyncClient) -> None:
        response = await client.get("/session/user-1")

        commander, white = response.json()["output"]
        assert commander["label"] == "Commander 1"
        assert commander["monster"] == "Orc Chief"
        assert commander["preset"] is True
        assert white["label"] == "W1 Ro"
        assert white["monster_en"] in {"Skeleton", "Orc"}
        assert white["preset"] is False
        assert response.json()["roster"].startswith("Commander 1: Orc Chief\nW1 Ro: ")

    async def test_same_session_returned(self, client: AsyncClient) -> None:
        first = (await client.get("/session/user-1")).json()
        second = (await client.get("/session/user-1")).json()

        assert first["output"] == second["output"]


class TestSlots:
    async def test_add_slot(self, client: AsyncClient) -> None:
        await _load(client, "user-1", "Core", 2)

        response = await client.post(
            "/session/user-1/slots",
            json={"number": 3, "color": "Black", "level": "Veteran"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["slots"][-1]["label"] == "B3 Ve"
        assert data["output"][-1]["monster_en"] == "Troll"
        assert data["active_preset"] is None

    async def test_add_commander_slot_without_level(self, client: AsyncClient) -> None:
        await _load(client, "user-1", "Core", 2)

        response = await client.post("/session/user-1/slots", json={"color": "Commander"})

        assert response.status_code == 200
        assert response.json()["output"][-1]["monster_en"] == "Orc Chief"

    async def test_add_bound_slot(self, client: AsyncClient) -> None:
        await _load(client, "user-1", "Core", 2)

        response = await client.post(
            "/session/user-1/slots",
            json={"number": 2, "color": "Black", "level": "Rookie", "monster": "Troll"},
        )

        assert response.status_code == 200
        assert response.json()["output"][-1]["preset"] is True

    async def test_invalid_slot_returns_400(self, client: AsyncClient) -> None:
        response = await client.post(
            "/session/user-1/slots",
            json={"number": 1, "color": "Gray", "level": "Special"},
        )

        assert response.status_code == 400
        assert response.json()["detail"]["kind"] == "invalid_input"

    async def test_unknown_monster_returns_404(self, client: AsyncClient) -> None:
        response = await client.post(
            "/session/user-1/slots",
            json={"number": 1, "color": "White", "level": "Rookie", "monster": "Nobody"},
        )

        assert response.status_code == 404
        assert response.json()["detail"]["kind"] == "not_found"

    async def test_number_out_of_range_rejected(self, client: AsyncClient) -> None:
        response = await client.post(
            "/session/user-1/slots",
            json={"number": 6, "color": "White", "level": "Rookie"},
        )

        assert response.status_code == 422

    async def test_impossible_assignment_returns_warning(self, client: AsyncClient) -> None:
        await _load(client, "user-1", "Core", 2)

        response = await client.post(
            "/session/user-1/slots",
            json={"number": 3, "color": "Gray", "level": "Rookie"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["output"] == []
        assert data["roster"] == ""
        assert data["warning"]["kind"] == "assignment_impossible"

    async def test_remove_slot(self, client: AsyncClient) -> None:
        await client.get("/session/user-1")

        response = await client.delete("/session/user-1/slots/2")

        assert response.status_code == 200
        data = response.json()
        assert len(data["slots"]) == 2
        assert len(data["output"]) == 1

    async def test_remove_bad_index_returns_400(self, client: AsyncClient) -> None:
        await client.get("/session/user-1")

        response = await client.delete("/session/user-1/slots/7")

        assert response.status_code == 400


class TestRandomize:
    async def test_keeps_preset(self, client: AsyncClient) -> None:
        before = (await client.get("/session/user-1")).json()

        response = await client.post("/session/user-1/randomize")

        assert response.status_code == 200
        data = response.json()
        assert data["active_preset"] == before["active_preset"]
        assert data["output"][0] == before["output"][0]


class TestToggleExpansion:
    async def test_toggle(self, client: AsyncClient) -> None:
        response = await client.post("/session/user-1/expansions/Awakenings")

        assert response.status_code == 200
        data = response.json()
        assert data["pack"] == "Awakenings"
        assert data["enabled"] is True
        assert data["session"]["expansions"] == ["Core", "Awakenings"]
        assert data["session"]["active_preset"] is None

    async def test_toggle_twice_disables(self, client: AsyncClient) -> None:
        await client.post("/session/user-1/expansions/Awakenings")

        response = await client.post("/session/user-1/expansions/Awakenings")

        assert response.json()["enabled"] is False

    async def test_unknown_pack_rejected(self, client: AsyncClient) -> None:
        response = await client.post("/session/user-1/expansions/Nowhere")

        assert response.status_code == 422


class TestLoadPreset:
    async def test_load(self, client: AsyncClient) -> None:
        data = await _load(client, "user-1", "Awakenings", 1)

        assert data["active_preset"]["name"] == "Restless Dead"
        assert [s["label"] for s in data["output"]] == [
            "W1 Ro",
            "Commander Brute",
            "Wandering Monster",
        ]
        assert data["output"][0]["monster"] == "Zombie (→ Skeleton)"

    async def test_unknown_preset_returns_404(self, client: AsyncClient) -> None:
        response = await client.post(
            "/session/user-1/preset", json={"pack": "Core", "chapter": 1, "index": 3}
        )

        assert response.status_code == 404
        assert response.json()["detail"]["kind"] == "not_found"


class TestDeleteSession:
    async def test_delete(self, client: AsyncClient) -> None:
        await client.get("/session/user-1")

        response = await client.delete("/session/user-1")

        assert response.status_code == 204
        assert "user-1" not in get_session_store()

    async def test_delete_unknown_returns_404(self, client: AsyncClient) -> None:
        response = await client.delete("/session/nobody")

        assert response.status_code == 404


class TestSessionFromStoredSettings:
    async def test_new_session_uses_stored_settings(self, client: AsyncClient) -> None:
        await client.put(
            "/settings/user-2",
            json={
                "language": "de",
                "expansions": ["Core", "Awakenings"],
                "use_preset": False,
                "player_count": 2,
            },
        )

        response = await client.get("/session/user-2")

        data = response.json()
        assert data["language"] == "de"
        assert data["player_count"] == 2
        assert data["expansions"] == ["Core", "Awakenings"]
        assert data["slots"] == []
        assert data["active_preset"] is None

    async def test_stored_player_count_limits_slots(self, client: AsyncClient) -> None:
        await client.put("/settings/user-2", json={"use_preset": False, "player_count": 2})

        response = await client.post(
            "/session/user-2/slots",
            json={"number": 3, "color": "White", "level": "Rookie"},
        )

        assert response.status_code == 400


class TestSlotsInPlay:
    async def test_slots_above_player_count_marked(self, client: AsyncClient) -> None:
        await client.put("/settings/user-3", json={"use_preset": False, "player_count": 1})

        data = await _load(client, "user-3", "Core", 2)

        assert [(s["label"], s["in_play"]) for s in data["output"]] == [
            ("Soul Reaper", True),
            ("W1 Ro", True),
            ("G2 Fi", False),
        ]
        assert data["roster"].splitlines()[-1] == "G2 Fi: Ghoul (not in play)"

    async def test_all_slots_in_play_at_full_count(self, client: AsyncClient) -> None:
        data = await _load(client, "user-1", "Core", 2)

        assert all(s["in_play"] for s in data["output"])
        assert all(s["in_play"] for s in data["slots"])
        assert "not in play" not in data["roster"]
