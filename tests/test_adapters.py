"""Tests for event store adapters."""
import pytest
from unittest.mock import MagicMock, patch
from app.adapters.memory import InMemoryAdapter
from app.adapters.redis_hash import RedisHashAdapter
from app.event_models import Event
import orjson

EVENT_ID = "00000000-0000-4000-8000-000000000001"
OWNER_ID = "00000000-0000-4000-8000-000000000002"


def make_event(event_id: str = EVENT_ID, **overrides) -> Event:
    fields = dict(
        id=event_id,
        owner_id=OWNER_ID,
        owner_name="Alice",
        asset_type="car",
        asset_description="sedan",
        status="active",
        start_date=1_000,
        end_date=1_000 + 86_400_000,
    )
    fields.update(overrides)
    return Event(**fields)


def test_memory_adapter_insert_and_get():
    """Test in-memory adapter stores events under their id."""
    adapter = InMemoryAdapter()
    event = make_event()

    adapter.insert(event)

    assert adapter.get(EVENT_ID) == event
    assert adapter.get("missing") is None
    assert adapter.count() == 1


def test_memory_adapter_insert_replaces():
    adapter = InMemoryAdapter()
    adapter.insert(make_event())
    adapter.insert(make_event(status="inactive"))

    assert adapter.count() == 1
    assert adapter.get(EVENT_ID).status == "inactive"


def test_memory_adapter_values_in_insertion_order():
    adapter = InMemoryAdapter()
    ids = [f"00000000-0000-4000-8000-00000000000{i}" for i in range(1, 4)]
    for event_id in ids:
        adapter.insert(make_event(event_id))

    assert [e.id for e in adapter.values()] == ids


def test_memory_adapter_remove():
    """Remove returns the removed record once."""
    adapter = InMemoryAdapter()
    event = make_event()
    adapter.insert(event)

    assert adapter.remove(EVENT_ID) == event
    assert adapter.remove(EVENT_ID) is None
    assert adapter.count() == 0


def test_memory_adapter_health_check():
    assert InMemoryAdapter().health_check() is True


@pytest.fixture
def mock_redis():
    with patch("app.adapters.redis_hash.Redis") as mock_redis_class:
        client = MagicMock()
        mock_redis_class.from_url.return_value = client
        yield client


def test_redis_adapter_insert_with_mock(mock_redis):
    """Events are written into the hash with camelCase JSON."""
    adapter = RedisHashAdapter(redis_url="redis://localhost:6379", hash_key="test:events")

    adapter.insert(make_event())

    key, field, data = mock_redis.hset.call_args[0]
    assert key == "test:events"
    assert field == EVENT_ID
    parsed = orjson.loads(data)
    assert parsed["ownerId"] == OWNER_ID
    assert parsed["assetType"] == "car"
    assert parsed["endDate"] == 1_000 + 86_400_000


def test_redis_adapter_get_with_mock(mock_redis):
    event = make_event()
    mock_redis.hget.return_value = orjson.dumps(event.model_dump(by_alias=True))
    adapter = RedisHashAdapter(redis_url="redis://localhost:6379", hash_key="test:events")

    assert adapter.get(EVENT_ID) == event
    mock_redis.hget.assert_called_once_with("test:events", EVENT_ID)


def test_redis_adapter_get_missing(mock_redis):
    mock_redis.hget.return_value = None
    adapter = RedisHashAdapter(redis_url="redis://localhost:6379")

    assert adapter.get(EVENT_ID) is None


def test_redis_adapter_remove_uses_transaction(mock_redis):
    """HGET and HDEL go through one MULTI/EXEC pipeline."""
    event = make_event()
    pipe = MagicMock()
    pipe.execute.return_value = [orjson.dumps(event.model_dump(by_alias=True)), 1]
    mock_redis.pipeline.return_value = pipe
    adapter = RedisHashAdapter(redis_url="redis://localhost:6379", hash_key="test:events")

    removed = adapter.remove(EVENT_ID)

    assert removed == event
    mock_redis.pipeline.assert_called_once_with(transaction=True)
    pipe.hget.assert_called_once_with("test:events", EVENT_ID)
    pipe.hdel.assert_called_once_with("test:events", EVENT_ID)


def test_redis_adapter_remove_missing(mock_redis):
    pipe = MagicMock()
    pipe.execute.return_value = [None, 0]
    mock_redis.pipeline.return_value = pipe
    adapter = RedisHashAdapter(redis_url="redis://localhost:6379")

    assert adapter.remove(EVENT_ID) is None


def test_redis_adapter_values_and_count(mock_redis):
    first = make_event()
    second = make_event("00000000-0000-4000-8000-000000000003", status="inactive")
    mock_redis.hvals.return_value = [
        orjson.dumps(first.model_dump(by_alias=True)),
        orjson.dumps(second.model_dump(by_alias=True)),
    ]
    mock_redis.hlen.return_value = 2
    adapter = RedisHashAdapter(redis_url="redis://localhost:6379")

    assert adapter.values() == [first, second]
    assert adapter.count() == 2


def test_redis_adapter_health_check_success(mock_redis):
    mock_redis.ping.return_value = True
    adapter = RedisHashAdapter(redis_url="redis://localhost:6379")

    assert adapter.health_check() is True
    mock_redis.ping.assert_called_once()


def test_redis_adapter_health_check_failure(mock_redis):
    """Test Redis adapter health check when Redis is unavailable."""
    mock_redis.ping.side_effect = Exception("Connection refused")
    adapter = RedisHashAdapter(redis_url="redis://localhost:6379")

    assert adapter.health_check() is False


def test_adapter_selection_memory():
    """Test that memory adapter is selected by default."""
    from app.services.event_store import EventStore

    store = EventStore()
    assert isinstance(store.adapter, InMemoryAdapter)


def test_adapter_selection_redis_without_url_falls_back():
    from app.services import event_store

    with patch.object(event_store.settings, "STORE_ADAPTER", "redis"), \
            patch.object(event_store.settings, "REDIS_URL", None):
        adapter = event_store._create_default_adapter()

    assert isinstance(adapter, InMemoryAdapter)
