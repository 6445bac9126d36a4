# tests/test_concurrency.py
import asyncio
import json
import time

import httpx

from inventory.config import Settings
from inventory.main import create_app


class _NoLock:
    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


async def _post(app, path, body):
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as ac:
        return await ac.post(path, json=body)

async def _run_all(app, path, bodies):
    return await asyncio.gather(*(_post(app, path, b) for b in bodies))

def _seeded_app(tmp_path, monkeypatch):
    path = tmp_path / "data.json"
    path.write_text(json.dumps([
        {"id": i, "name": f"P{i}", "price": 1, "stock": 0, "lowStockThreshold": 5, "category": "x"}
        for i in range(1, 11)
    ]))
    app = create_app(Settings(data_file=path))

    # Slow reads so every request is between load and save at the same time
    storage = app.state.storage
    load = storage.load

    def slow_load():
        result = load()
        time.sleep(0.05)
        return result

    monkeypatch.setattr(storage, "load", slow_load)
    return app, path

UPDATES = [{"id": i, "newQuantity": i * 10} for i in range(1, 11)]


def test_concurrent_updates_are_all_persisted(tmp_path, monkeypatch):
    app, path = _seeded_app(tmp_path, monkeypatch)

    results = asyncio.run(_run_all(app, "/update-stock", UPDATES))
    assert [r.status_code for r in results] == [200] * 10

    stored = json.loads(path.read_text())
    assert [p["stock"] for p in stored] == [i * 10 for i in range(1, 11)]

def test_updates_are_lost_without_the_write_lock(tmp_path, monkeypatch):
    app, path = _seeded_app(tmp_path, monkeypatch)
    app.state.service._lock = _NoLock()

    results = asyncio.run(_run_all(app, "/update-stock", UPDATES))
    assert [r.status_code for r in results] == [200] * 10

    # each request saved its own stale copy, so earlier writes were overwritten
    stored = json.loads(path.read_text())
    assert sum(1 for p in stored if p["stock"] != 0) < 10

def test_concurrent_adds_get_distinct_ids(tmp_path, monkeypatch):
    app, path = _seeded_app(tmp_path, monkeypatch)
    bodies = [{"name": f"Item {i}", "price": 1, "stock": i, "category": "x"} for i in range(10)]

    results = asyncio.run(_run_all(app, "/add-product", bodies))
    assert all(r.status_code == 200 for r in results)
    assert sorted(r.json()["id"] for r in results) == list(range(11, 21))
    assert len(json.loads(path.read_text())) == 20
