import asyncio

import pytest

from hasher.work import compute_digest


@pytest.mark.asyncio
async def test_submit_poll_and_stats_end_to_end(client, services):
    resp = await client.post("/hash", data={"password": "angryMonkey"})
    assert resp.status_code == 202
    assert resp.json() == {"id": 1}
    assert resp.headers["location"] == "/hash/1"
    assert resp.headers["access-control-allow-origin"] == "*"

    pending = await client.get("/hash/1")
    assert pending.status_code == 202
    assert pending.headers["location"] == "/hash/1"

    await services.scheduler.join()

    done = await client.get("/hash/1")
    assert done.status_code == 200
    assert done.text == compute_digest("angryMonkey")
    assert done.headers["access-control-allow-origin"] == "*"

    stats = await client.get("/stats")
    assert stats.status_code == 200
    body = stats.json()
    assert body["total"] == 1
    assert body["average"] >= 250_000  # micros, at least the worker delay


@pytest.mark.asyncio
async def test_ids_are_sequential_per_submission(client):
    for expected, password in enumerate(["My favorite password", "jumpcloud", "1Forg0t"], start=1):
        resp = await client.post("/hash", data={"password": password})
        assert resp.json()["id"] == expected


@pytest.mark.asyncio
async def test_concurrent_submissions_get_distinct_ids(client):
    responses = await asyncio.gather(
        *(client.post("/hash", data={"password": f"pw-{i}"}) for i in range(50))
    )
    ids = {r.json()["id"] for r in responses}
    assert ids == set(range(1, 51))


@pytest.mark.asyncio
async def test_result_stays_complete_once_done(client, services):
    await client.post("/hash", data={"password": "jumpcloud"})
    await services.scheduler.join()

    for _ in range(3):
        resp = await client.get("/hash/1")
        assert resp.status_code == 200
        assert resp.text == compute_digest("jumpcloud")


@pytest.mark.asyncio
async def test_each_job_gets_its_own_digest(client, services):
    passwords = ["My favorite password", "jumpcloud", "1Forg0t"]
    for password in passwords:
        await client.post("/hash", data={"password": password})
    await services.scheduler.join()

    for job_id, password in enumerate(passwords, start=1):
        resp = await client.get(f"/hash/{job_id}")
        assert resp.text == compute_digest(password)

    stats = (await client.get("/stats")).json()
    assert stats["total"] == len(passwords)


@pytest.mark.asyncio
async def test_missing_password_hashes_empty_string(client, services):
    resp = await client.post("/hash")
    assert resp.status_code == 202
    await services.scheduler.join()

    result = await client.get("/hash/1")
    assert result.text == compute_digest("")


@pytest.mark.asyncio
async def test_unknown_id_returns_404(client):
    resp = await client.get("/hash/999")
    assert resp.status_code == 404
    assert resp.text == ""


@pytest.mark.asyncio
async def test_id_beyond_last_issued_returns_404(client):
    await client.post("/hash", data={"password": "x"})
    resp = await client.get("/hash/2")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_stats_empty(client):
    resp = await client.get("/stats")
    assert resp.status_code == 200
    assert resp.json() == {"total": 0, "average": 0}
    assert resp.headers["access-control-allow-origin"] == "*"


@pytest.mark.asyncio
async def test_worker_failure_leaves_job_pending(client, services, monkeypatch):
    def boom(password):
        raise RuntimeError("digest failed")

    monkeypatch.setattr("hasher.scheduler.compute_digest", boom)
    await client.post("/hash", data={"password": "x"})
    await services.scheduler.join()

    resp = await client.get("/hash/1")
    assert resp.status_code == 202
    assert services.stats.snapshot().total == 0
