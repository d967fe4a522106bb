"""Tests for quests: ownership, participation, completion rewards and filters."""
import pytest
from httpx import AsyncClient

from volunteer_api.services import achievement_service, message_queue_service, quest_service

API = "/api/v1"


@pytest.fixture
async def refs(authed_client: AsyncClient) -> dict:
    region = (await authed_client.post(f"{API}/regions", json={"name": "Kazan Region"})).json()
    city = (
        await authed_client.post(
            f"{API}/cities",
            json={"name": "Kazan", "latitude": 55.79, "longitude": 49.12, "regionId": region["id"]},
        )
    ).json()
    other_city = (
        await authed_client.post(f"{API}/cities", json={"name": "Elabuga", "regionId": region["id"]})
    ).json()
    category = (await authed_client.post(f"{API}/categories", json={"name": "Ecology"})).json()
    achievement = (
        await authed_client.post(
            f"{API}/achievements", json={"title": "Tree Hugger", "rarity": "rare"}
        )
    ).json()
    return {
        "city": city["id"],
        "other_city": other_city["id"],
        "category": category["id"],
        "achievement": achievement["id"],
    }


def _quest_body(refs: dict, **overrides) -> dict:
    body = {
        "title": "Plant trees",
        "description": "Spring planting in the park",
        "cityId": refs["city"],
        "experienceReward": 200,
        "achievementId": refs["achievement"],
        "categoryIds": [refs["category"]],
        "steps": [
            {"title": "Gather volunteers"},
            {
                "title": "Buy saplings",
                "type": "finance",
                "requirement": {"targetValue": 5000},
            },
        ],
    }
    body.update(overrides)
    return body


async def _create_quest(client: AsyncClient, refs: dict, **overrides) -> dict:
    response = await client.post(f"{API}/quests", json=_quest_body(refs, **overrides))
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_create_quest(authed_client: AsyncClient, refs, test_user):
    quest = await _create_quest(authed_client, refs)
    assert quest["status"] == "active"
    assert quest["ownerId"] == test_user.id
    assert [c["name"] for c in quest["categories"]] == ["Ecology"]
    assert quest["steps"][0]["status"] == "pending"
    assert quest["steps"][1]["requirement"] == {"currentValue": 0, "targetValue": 5000}


@pytest.mark.asyncio
async def test_step_requirement_needed_for_typed_steps(authed_client: AsyncClient, refs):
    response = await authed_client.post(
        f"{API}/quests",
        json=_quest_body(refs, steps=[{"title": "Collect", "type": "material"}]),
    )
    assert response.status_code == 400
    assert response.json()["issues"][0]["path"] == "steps.0"


@pytest.mark.asyncio
async def test_quest_filters(authed_client: AsyncClient, refs):
    first = await _create_quest(authed_client, refs)
    second = await _create_quest(
        authed_client, refs, title="Clean river", cityId=refs["other_city"], categoryIds=[]
    )

    by_city = (await authed_client.get(f"{API}/quests", params={"cityId": refs["other_city"]})).json()
    assert [q["id"] for q in by_city] == [second["id"]]

    by_category = (
        await authed_client.get(f"{API}/quests", params={"categoryId": refs["category"]})
    ).json()
    assert [q["id"] for q in by_category] == [first["id"]]

    await authed_client.post(f"{API}/quests/{second['id']}/archive")
    archived = (await authed_client.get(f"{API}/quests/filter", params={"status": "archived"})).json()
    assert [q["id"] for q in archived] == [second["id"]]

    response = await authed_client.get(f"{API}/quests/filter", params={"status": "unknown"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_only_owner_may_mutate(authed_client: AsyncClient, client: AsyncClient, refs, other_auth):
    quest = await _create_quest(authed_client, refs)
    headers = other_auth.headers

    for method, suffix, body in (
        ("PATCH", "", {"title": "Mine now"}),
        ("DELETE", "", None),
        ("POST", "/complete", None),
        ("POST", "/archive", None),
    ):
        response = await client.request(
            method, f"{API}/quests/{quest['id']}{suffix}", json=body, headers=headers
        )
        assert response.status_code == 403, (method, suffix)


@pytest.mark.asyncio
async def test_update_quest_replaces_categories(authed_client: AsyncClient, refs):
    quest = await _create_quest(authed_client, refs)
    extra = (await authed_client.post(f"{API}/categories", json={"name": "Animals"})).json()

    response = await authed_client.patch(
        f"{API}/quests/{quest['id']}",
        json={"categoryIds": [extra["id"]], "experienceReward": 50},
    )
    assert response.status_code == 200
    data = response.json()
    assert [c["name"] for c in data["categories"]] == ["Animals"]
    assert data["experienceReward"] == 50
    assert data["title"] == quest["title"]


@pytest.mark.asyncio
async def test_join_and_leave(authed_client: AsyncClient, client: AsyncClient, refs, other_user, other_auth):
    quest = await _create_quest(authed_client, refs)
    headers = other_auth.headers

    response = await client.post(
        f"{API}/quests/{quest['id']}/join/{other_user.id}", headers=headers
    )
    assert response.status_code == 201
    assert response.json()["status"] == "in_progress"

    response = await client.post(
        f"{API}/quests/{quest['id']}/join/{other_user.id}", headers=headers
    )
    assert response.status_code == 409

    users = (await client.get(f"{API}/quests/{quest['id']}/users")).json()
    assert [(u["id"], u["status"]) for u in users] == [(other_user.id, "in_progress")]

    joined = (await client.get(f"{API}/quests/user/{other_user.id}")).json()
    assert [j["questId"] for j in joined] == [quest["id"]]
    assert (await client.get(f"{API}/quests/available/{other_user.id}")).json() == []

    response = await client.post(
        f"{API}/quests/{quest['id']}/leave/{other_user.id}", headers=headers
    )
    assert response.status_code == 204
    available = (await client.get(f"{API}/quests/available/{other_user.id}")).json()
    assert [q["id"] for q in available] == [quest["id"]]


@pytest.mark.asyncio
async def test_cannot_join_for_someone_else(authed_client: AsyncClient, refs, other_user):
    quest = await _create_quest(authed_client, refs)
    response = await authed_client.post(f"{API}/quests/{quest['id']}/join/{other_user.id}")
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_complete_rewards_participants(
    authed_client: AsyncClient, client: AsyncClient, refs, other_user, other_auth, monkeypatch
):
    published = []
    monkeypatch.setattr(
        message_queue_service,
        "send_to_queue",
        lambda queue, message: published.append((queue, message)) or True,
    )
    quest = await _create_quest(authed_client, refs)
    await client.post(
        f"{API}/quests/{quest['id']}/join/{other_user.id}", headers=other_auth.headers
    )

    response = await authed_client.post(f"{API}/quests/{quest['id']}/complete")
    assert response.status_code == 200
    assert response.json()["status"] == "completed"

    user = (await client.get(f"{API}/users/{other_user.id}")).json()
    assert user["experience"] == 200
    assert user["level"] == 2

    awards = (await client.get(f"{API}/achievements/user/{other_user.id}")).json()
    assert [a["achievementId"] for a in awards] == [refs["achievement"]]

    users = (await client.get(f"{API}/quests/{quest['id']}/users")).json()
    assert users[0]["status"] == "completed"

    assert published[0][0] == quest_service.QUEST_EVENTS_QUEUE
    assert published[0][1]["type"] == "quest.completed"
    assert published[0][1]["userIds"] == [other_user.id]

    response = await authed_client.post(f"{API}/quests/{quest['id']}/complete")
    assert response.status_code == 409
    response = await client.post(
        f"{API}/quests/{quest['id']}/join/{other_user.id}", headers=other_auth.headers
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_complete_skips_already_owned_achievement(
    authed_client: AsyncClient, client: AsyncClient, refs, other_user, other_auth
):
    quest = await _create_quest(authed_client, refs)
    await authed_client.post(f"{API}/achievements/{refs['achievement']}/assign/{other_user.id}")
    await client.post(
        f"{API}/quests/{quest['id']}/join/{other_user.id}", headers=other_auth.headers
    )

    response = await authed_client.post(f"{API}/quests/{quest['id']}/complete")
    assert response.status_code == 200
    awards = (await client.get(f"{API}/achievements/user/{other_user.id}")).json()
    assert len(awards) == 1


@pytest.mark.asyncio
async def test_complete_survives_concurrent_award(
    authed_client: AsyncClient, client: AsyncClient, refs, other_user, other_auth, monkeypatch
):
    quest = await _create_quest(authed_client, refs)
    await authed_client.post(f"{API}/achievements/{refs['achievement']}/assign/{other_user.id}")
    await client.post(
        f"{API}/quests/{quest['id']}/join/{other_user.id}", headers=other_auth.headers
    )
    # Award row exists but the lookup misses it, as with a concurrent award
    monkeypatch.setattr(achievement_service, "find_award", lambda *args: None)

    response = await authed_client.post(f"{API}/quests/{quest['id']}/complete")
    assert response.status_code == 200
    assert response.json()["status"] == "completed"

    user = (await client.get(f"{API}/users/{other_user.id}")).json()
    assert user["experience"] == 200
    users = (await client.get(f"{API}/quests/{quest['id']}/users")).json()
    assert [u["status"] for u in users] == ["completed"]
    awards = (await client.get(f"{API}/achievements/user/{other_user.id}")).json()
    assert len(awards) == 1


@pytest.mark.asyncio
async def test_complete_skips_deleted_participants(
    authed_client: AsyncClient, client: AsyncClient, refs, other_user, other_auth, monkeypatch
):
    published = []
    monkeypatch.setattr(
        message_queue_service,
        "send_to_queue",
        lambda queue, message: published.append(message) or True,
    )
    quest = await _create_quest(authed_client, refs)
    await client.post(
        f"{API}/quests/{quest['id']}/join/{other_user.id}", headers=other_auth.headers
    )
    response = await client.delete(f"{API}/users/{other_user.id}", headers=other_auth.headers)
    assert response.status_code == 200

    response = await authed_client.post(f"{API}/quests/{quest['id']}/complete")
    assert response.status_code == 200
    assert response.json()["status"] == "completed"
    assert published[0]["userIds"] == []


@pytest.mark.asyncio
async def test_archived_quest_cannot_be_completed(authed_client: AsyncClient, refs):
    quest = await _create_quest(authed_client, refs)
    await authed_client.post(f"{API}/quests/{quest['id']}/archive")
    response = await authed_client.post(f"{API}/quests/{quest['id']}/complete")
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_deleted_quest_not_found(authed_client: AsyncClient, refs):
    quest = await _create_quest(authed_client, refs)
    response = await authed_client.delete(f"{API}/quests/{quest['id']}")
    assert response.status_code == 200
    response = await authed_client.get(f"{API}/quests/{quest['id']}")
    assert response.status_code == 404
