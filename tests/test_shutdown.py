import asyncio

import pytest
from httpx import ASGITransport, AsyncClient

from hasher.drain import ShutdownCoordinator
from hasher.main import create_app


@pytest.mark.asyncio
async def test_wait_drained_when_idle():
    assert await ShutdownCoordinator().wait_drained() is True


@pytest.mark.asyncio
async def test_wait_drained_blocks_until_requests_finish():
    coordinator = ShutdownCoordinator()
    coordinator.enter()
    coordinator.enter()

    async def finish():
        await asyncio.sleep(0.05)
        coordinator.exit()
        await asyncio.sleep(0.05)
        coordinator.exit()

    finisher = asyncio.create_task(finish())
    assert await coordinator.wait_drained(timeout=2) is True
    assert coordinator.in_flight == 0
    await finisher


@pytest.mark.asyncio
async def test_wait_drained_times_out():
    coordinator = ShutdownCoordinator()
    coordinator.enter()
    assert await coordinator.wait_drained(timeout=0.05) is False
    assert coordinator.in_flight == 1


@pytest.mark.asyncio
async def test_requests_are_counted_only_while_in_flight(client, services):
    await client.get("/stats")
    assert services.coordinator.in_flight == 0


@pytest.mark.asyncio
async def test_abandon_drops_pending_workers(client, services):
    await client.post("/hash", data={"password": "x"})
    await client.post("/hash", data={"password": "y"})
    assert services.scheduler.running == 2

    assert await services.scheduler.abandon() == 2
    assert services.scheduler.running == 0
    assert services.store.pending_count() == 2


@pytest.mark.asyncio
async def test_lifespan_shutdown_abandons_workers(app, client, services):
    async with app.router.lifespan_context(app):
        await client.post("/hash", data={"password": "x"})
        assert services.scheduler.running == 1

    assert services.scheduler.running == 0
    assert services.coordinator.in_flight == 0


@pytest.mark.asyncio
async def test_lifespan_shutdown_waits_for_running_request():
    app = create_app(hash_delay=0.3)
    services = app.state.services
    started = asyncio.Event()
    release = asyncio.Event()

    @app.get("/slow")
    async def slow():
        started.set()
        await release.wait()
        return {"ok": True}

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        lifespan = app.router.lifespan_context(app)
        await lifespan.__aenter__()

        request = asyncio.create_task(client.get("/slow"))
        await started.wait()
        assert services.coordinator.in_flight == 1

        shutdown = asyncio.create_task(lifespan.__aexit__(None, None, None))
        await asyncio.sleep(0.1)
        assert not shutdown.done()

        release.set()
        resp = await request
        await asyncio.wait_for(shutdown, timeout=2)

    assert resp.status_code == 200
    assert resp.json() == {"ok": True}
    assert services.coordinator.in_flight == 0
