"""
Tests for the data query API.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from data_query.api.app import create_app
from data_query.api.dependencies import install_service
from data_query.services import QueryService


@pytest_asyncio.fixture
async def client(config, transport, storage):
    """Create a test client with an in-memory pipeline."""
    app = create_app()
    install_service(app, QueryService.create(config=config, transport=transport, storage=storage))

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.mark.asyncio
async def test_root(client):
    """Test root endpoint."""
    response = await client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Data Query API"
    assert data["block_type"] == "data-query"


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_query_then_cached(client, network):
    network.payload = {"temp": 21}
    source = '@weather\nbody: {"city":"Tokyo"}'

    first = await client.post("/query", json={"source": source})
    second = await client.post("/query", json={"source": source})

    assert first.status_code == 200
    data = first.json()
    assert data["endpoint"] == "weather"
    assert data["from_cache"] is False
    assert data["data"] == {"temp": 21}
    assert data["error"] is None
    assert data["rendered"] == '{\n  "temp": 21\n}'
    assert second.json()["from_cache"] is True
    assert len(network.requests) == 1


@pytest.mark.asyncio
async def test_refresh(client, network):
    source = '{"type":"rest","url":"https://x/items"}'
    await client.post("/query", json={"source": source})
    response = await client.post("/query/refresh", json={"source": source})

    assert response.status_code == 200
    assert response.json()["from_cache"] is False
    assert len(network.requests) == 2


@pytest.mark.asyncio
async def test_query_parse_error_is_400(client, network):
    response = await client.post("/query", json={"source": "@unknown"})

    assert response.status_code == 400
    assert "alias not found" in response.json()["detail"]
    assert network.requests == []


@pytest.mark.asyncio
async def test_query_execution_error_is_a_result(client):
    response = await client.post("/query", json={"source": '{"type":"soap","url":"https://x"}'})

    assert response.status_code == 200
    data = response.json()
    assert data["data"] is None
    assert "soap" in data["error"]
    assert data["rendered"] == data["error"]


@pytest.mark.asyncio
async def test_parse_endpoint(client, network):
    response = await client.post(
        "/query/parse",
        json={"source": '@github\nquery: { viewer }\nvariables: {"n": 1}'},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["protocol"] == "graphql"
    assert data["query"] == "{ viewer }"
    assert data["variables"] == {"n": 1}
    assert data["headers"]["Authorization"] == "Bearer base"
    assert network.requests == []


@pytest.mark.asyncio
async def test_empty_source_is_rejected(client):
    response = await client.post("/query", json={"source": ""})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_list_endpoints(client):
    response = await client.get("/endpoints")
    assert response.status_code == 200
    assert [e["alias"] for e in response.json()] == ["weather", "github", "node"]


@pytest.mark.asyncio
async def test_stats_and_clear(client):
    await client.post("/query", json={"source": "@weather"})

    stats = (await client.get("/cache/stats")).json()
    assert stats["count"] == 1
    assert stats["total_bytes"] > 0
    assert stats["cache_duration_minutes"] == 60

    cleared = await client.delete("/cache")
    assert cleared.status_code == 200
    assert cleared.json()["deleted_count"] == 1

    stats = (await client.get("/cache/stats")).json()
    assert stats == {"count": 0, "total_bytes": 0, "cache_duration_minutes": 60}


@pytest.mark.asyncio
async def test_clear_failure_is_500(client, storage):
    await client.post("/query", json={"source": "@weather"})
    storage.failing_deletes.update(storage.files)

    response = await client.delete("/cache")

    assert response.status_code == 500
    assert "Failed to clear cache" in response.json()["detail"]


@pytest.mark.asyncio
async def test_lifespan_wires_local_storage(tmp_path, monkeypatch):
    from data_query.api import dependencies
    from data_query.config import Settings

    settings = Settings(storage_backend="local", storage_root=str(tmp_path), endpoints_file=None)
    monkeypatch.setattr(dependencies, "get_settings", lambda: settings)
    app = create_app()

    async with dependencies.lifespan(app):
        assert isinstance(app.state.query_service, QueryService)
        assert (tmp_path / settings.cache_dir).is_dir()

    assert not hasattr(app.state, "query_service")
