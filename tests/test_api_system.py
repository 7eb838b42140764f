async def test_health(make_client):
    res = await make_client().get("/api/v1/system/health")
    assert res.json() == {"status": "ok"}


async def test_db_health(make_client):
    res = await make_client().get("/api/v1/system/health/db")
    assert res.json()["db"] is True


async def test_metrics_count_rows(make_group):
    group, users = await make_group("Alice", "Bob")
    alice_client, _ = users[0]
    await alice_client.post(
        f"/api/v1/groups/{group['id']}/transactions",
        json={"description": "Snacks", "amount": 8},
    )

    res = await alice_client.get("/api/v1/system/metrics")
    assert res.json() == {"users": 2, "groups": 1, "transactions": 1}
