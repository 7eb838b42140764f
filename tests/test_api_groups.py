from sqlalchemy import delete

from splitboard.models.group_member import GroupMember


async def test_create_group_adds_creator_with_invite_code(register):
    client, alice = await register("Alice")

    res = await client.post("/api/v1/groups/", json={"name": "Ski weekend"})
    assert res.status_code == 200
    group = res.json()
    assert group["created_by"] == alice["id"]
    assert len(group["invite_code"]) == 8

    members = (await client.get(f"/api/v1/groups/{group['id']}/members")).json()
    assert [m["nickname"] for m in members] == ["Alice"]

    mine = (await client.get("/api/v1/groups/")).json()
    assert [g["id"] for g in mine] == [group["id"]]


async def test_blank_group_name_is_rejected(register):
    client, _ = await register("Alice")
    res = await client.post("/api/v1/groups/", json={"name": "   "})
    assert res.status_code == 422


async def test_join_by_invite_code(make_group):
    group, users = await make_group("Alice", "Bob", "Carol")
    bob_client, _ = users[1]

    members = (await bob_client.get(f"/api/v1/groups/{group['id']}/members")).json()
    assert [m["nickname"] for m in members] == ["Alice", "Bob", "Carol"]


async def test_join_twice_or_with_unknown_code(make_group):
    group, users = await make_group("Alice", "Bob")
    bob_client, _ = users[1]

    again = await bob_client.post("/api/v1/groups/join", json={"invite_code": group["invite_code"]})
    assert again.status_code == 400

    unknown = await bob_client.post("/api/v1/groups/join", json={"invite_code": "deadbeef"})
    assert unknown.status_code == 404


async def test_outsider_cannot_view_members(make_group, register):
    group, _ = await make_group("Alice", "Bob")
    mallory_client, _ = await register("Mallory")

    res = await mallory_client.get(f"/api/v1/groups/{group['id']}/members")
    assert res.status_code == 403

    missing = await mallory_client.get("/api/v1/groups/4040/members")
    assert missing.status_code == 404


async def test_creator_listed_without_membership_row(make_group, session_factory):
    group, users = await make_group("Alice", "Bob")
    alice_client, alice = users[0]

    async with session_factory() as session:
        await session.execute(
            delete(GroupMember).where(
                GroupMember.group_id == group["id"],
                GroupMember.user_id == alice["id"],
            )
        )
        await session.commit()

    res = await alice_client.get(f"/api/v1/groups/{group['id']}/members")
    assert res.status_code == 200
    assert [m["nickname"] for m in res.json()] == ["Alice", "Bob"]


async def test_member_can_leave(make_group):
    group, users = await make_group("Alice", "Bob")
    alice_client, _ = users[0]
    bob_client, bob = users[1]

    res = await bob_client.delete(f"/api/v1/groups/{group['id']}/members/{bob['id']}")
    assert res.status_code == 200
    assert res.json()["message"] == "Left group"

    members = (await alice_client.get(f"/api/v1/groups/{group['id']}/members")).json()
    assert [m["nickname"] for m in members] == ["Alice"]


async def test_creator_removes_member_but_cannot_leave(make_group):
    group, users = await make_group("Alice", "Bob", "Carol")
    alice_client, alice = users[0]
    bob_client, bob = users[1]
    _, carol = users[2]

    res = await bob_client.delete(f"/api/v1/groups/{group['id']}/members/{carol['id']}")
    assert res.status_code == 403

    res = await bob_client.delete(f"/api/v1/groups/{group['id']}/members/{alice['id']}")
    assert res.status_code == 403

    res = await alice_client.delete(f"/api/v1/groups/{group['id']}/members/{alice['id']}")
    assert res.status_code == 400

    res = await alice_client.delete(f"/api/v1/groups/{group['id']}/members/{bob['id']}")
    assert res.status_code == 200
    assert res.json()["message"] == "Member removed"


async def test_only_creator_deletes_group(make_group):
    group, users = await make_group("Alice", "Bob")
    alice_client, _ = users[0]
    bob_client, _ = users[1]

    await alice_client.post(
        f"/api/v1/groups/{group['id']}/transactions",
        json={"description": "Fuel", "amount": "40.00"},
    )

    assert (await bob_client.delete(f"/api/v1/groups/{group['id']}")).status_code == 403

    res = await alice_client.delete(f"/api/v1/groups/{group['id']}")
    assert res.status_code == 200

    assert (await alice_client.get(f"/api/v1/groups/{group['id']}/transactions")).status_code == 404
    assert (await bob_client.get("/api/v1/groups/")).json() == []
