"""End-to-end tests for the resolution pipeline."""

import pytest

from data_query.entities import now_ms
from data_query.errors import ParseError
from data_query.services import CacheService, Dispatcher, QueryService


@pytest.fixture
def service(config, transport, storage, clock) -> QueryService:
    # Results are stamped with wall-clock time by the dispatcher
    clock.now = now_ms()
    return QueryService(
        config=config,
        dispatcher=Dispatcher.create(transport=transport),
        cache=CacheService.create(storage=storage, config=config, clock=clock),
    )


@pytest.mark.asyncio
async def test_miss_fetches_and_stores(service, network, storage):
    network.payload = {"temp": 21}
    outcome = await service.resolve('@weather\nbody: {"city":"Tokyo"}')

    assert outcome.from_cache is False
    assert outcome.result.data == {"temp": 21}
    assert outcome.descriptor.endpoint_ref == "weather"
    assert len(network.requests) == 1
    assert len(storage.files) == 1


@pytest.mark.asyncio
async def test_hit_skips_network(service, network):
    await service.resolve("@weather")
    outcome = await service.resolve("@weather")

    assert outcome.from_cache is True
    assert len(network.requests) == 1


@pytest.mark.asyncio
async def test_expired_entry_is_refetched(service, network, clock):
    await service.resolve("@weather")
    clock.advance_minutes(61)
    outcome = await service.resolve("@weather")

    assert outcome.from_cache is False
    assert len(network.requests) == 2


@pytest.mark.asyncio
async def test_refresh_bypasses_cache_and_overwrites(service, network):
    network.payload = {"v": 1}
    await service.resolve("@weather")
    network.payload = {"v": 2}

    refreshed = await service.refresh("@weather")
    cached = await service.resolve("@weather")

    assert refreshed.from_cache is False
    assert refreshed.result.data == {"v": 2}
    assert cached.from_cache is True
    assert cached.result.data == {"v": 2}
    assert len(network.requests) == 2


@pytest.mark.asyncio
async def test_parse_error_aborts_before_network(service, network, storage):
    with pytest.raises(ParseError):
        await service.resolve("@nowhere")

    assert network.requests == []
    assert storage.files == {}


@pytest.mark.asyncio
async def test_failed_results_are_cached(service, network):
    network.status = 503
    first = await service.resolve('{"type":"rest","url":"https://x/down"}')
    second = await service.resolve('{"type":"rest","url":"https://x/down"}')

    assert first.result.error
    assert second.from_cache is True
    assert second.result.error == first.result.error
    assert len(network.requests) == 1


@pytest.mark.asyncio
async def test_header_only_difference_shares_cache_entry(service, network):
    """Headers are not part of the cache key."""
    await service.resolve('@github\nquery: {a}\nheaders: {"Authorization": "Bearer one"}')
    outcome = await service.resolve('@github\nquery: {a}\nheaders: {"Authorization": "Bearer two"}')

    assert outcome.from_cache is True
    assert network.last.headers["authorization"] == "Bearer one"


@pytest.mark.asyncio
async def test_unsupported_protocol_is_a_result(service, network):
    outcome = await service.resolve('{"type":"soap","url":"https://x/soap"}')

    assert outcome.result.data is None
    assert "soap" in outcome.result.error
    assert network.requests == []


@pytest.mark.asyncio
async def test_clear_and_stats(service):
    await service.resolve("@weather")
    await service.resolve('@weather\nbody: {"city":"Osaka"}')

    assert (await service.cache_stats()).count == 2
    assert await service.clear_cache() == 2
    assert (await service.cache_stats()).count == 0


@pytest.mark.asyncio
async def test_create_factory(config, transport, storage):
    service = QueryService.create(config=config, transport=transport, storage=storage)

    assert service.endpoints == config.endpoints
    assert service.dispatcher.protocols == ["graphql", "grpc", "rest", "rpc"]
    assert await service.is_healthy() is True
