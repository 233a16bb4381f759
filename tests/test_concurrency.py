# tests/test_concurrency.py
import asyncio
import httpx

from conftest import AUTH, make_app


async def _create_task(app, n):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        body = {
            "name": f"Widget {n}",
            "description": "Concurrent widget",
            "price": n,
            "category": "widgets",
            "inStock": n % 2 == 0,
        }
        return await ac.post("/api/products", json=body, headers=AUTH)


async def _create_and_delete(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        return await asyncio.gather(
            *[_create_task(app, n) for n in range(20)],
            ac.delete("/api/products/3", headers=AUTH),
            ac.delete("/api/products/3", headers=AUTH),
        )


def test_concurrent_creates_get_unique_ids():
    app = make_app()
    results = asyncio.run(_create_and_delete(app))
    creates, deletes = results[:20], results[20:]

    assert all(r.status_code == 201 for r in creates)
    ids = [r.json()["product"]["id"] for r in creates]
    assert len(set(ids)) == 20

    # exactly one of the two deletes of the same record wins
    assert sorted(r.status_code for r in deletes) == [200, 404]

    assert len(app.state.store) == 5 - 1 + 20
    assert all(app.state.store.get(pid) is not None for pid in ids)
