"""Redis hash event store adapter."""
import structlog
import orjson
from redis import Redis
from redis.exceptions import RedisError
from .base import StoreAdapter
from ..event_models import Event
from ..config import get_settings

log = structlog.get_logger()
settings = get_settings()


class RedisHashAdapter(StoreAdapter):
    """Redis implementation of the event store adapter.

    All events live in a single hash: field = event id, value = the
    event encoded as JSON with its wire (camelCase) field names. Durability
    comes from the Redis server's persistence settings.
    """

    def __init__(self, redis_url: str | None = None, hash_key: str | None = None):
        """
        Initialize Redis hash adapter.

        Args:
            redis_url: Redis connection URL (defaults to settings.REDIS_URL)
            hash_key: Name of the hash holding events (defaults to settings.REDIS_HASH_KEY)
        """
        self.redis_url = redis_url or str(settings.REDIS_URL)
        self._hash_key = hash_key or settings.REDIS_HASH_KEY
        self._client: Redis | None = None

    def _get_client(self) -> Redis:
        """Get or create Redis client."""
        if self._client is None:
            self._client = Redis.from_url(
                self.redis_url,
                decode_responses=False,  # orjson works on bytes
                socket_connect_timeout=5,
                socket_timeout=5
            )
        return self._client

    @staticmethod
    def _encode(event: Event) -> bytes:
        return orjson.dumps(event.model_dump(by_alias=True))

    @staticmethod
    def _decode(raw: bytes) -> Event:
        return Event.model_validate(orjson.loads(raw))

    def get(self, event_id: str) -> Event | None:
        try:
            raw = self._get_client().hget(self._hash_key, event_id)
        except RedisError as e:
            log.error("redis.get_failed", error=str(e), id=event_id)
            raise
        if raw is None:
            return None
        return self._decode(raw)

    def insert(self, event: Event) -> None:
        """
        Write an event into the hash.

        Raises:
            RedisError: If unable to write to Redis
        """
        try:
            self._get_client().hset(self._hash_key, event.id, self._encode(event))
        except RedisError as e:
            log.error("redis.insert_failed", error=str(e), id=event.id)
            raise
        log.debug("store.inserted", id=event.id, adapter="redis_hash")

    def remove(self, event_id: str) -> Event | None:
        """
        Read and delete an event inside one MULTI/EXEC transaction.

        Returns:
            The removed event, or None if the id was not present
        """
        try:
            pipe = self._get_client().pipeline(transaction=True)
            pipe.hget(self._hash_key, event_id)
            pipe.hdel(self._hash_key, event_id)
            raw, _ = pipe.execute()
        except RedisError as e:
            log.error("redis.remove_failed", error=str(e), id=event_id)
            raise
        if raw is None:
            return None
        log.debug("store.removed", id=event_id, adapter="redis_hash")
        return self._decode(raw)

    def values(self) -> list[Event]:
        try:
            entries = self._get_client().hvals(self._hash_key)
        except RedisError as e:
            log.error("redis.list_failed", error=str(e))
            raise
        return [self._decode(raw) for raw in entries]

    def count(self) -> int:
        try:
            return self._get_client().hlen(self._hash_key)
        except RedisError as e:
            log.error("redis.count_failed", error=str(e))
            raise

    def health_check(self) -> bool:
        """
        Check Redis connection health.

        Returns:
            True if Redis is accessible, False otherwise
        """
        try:
            client = self._get_client()
            return bool(client.ping())
        except Exception as e:
            log.warning("redis.health_check_failed", error=str(e))
            return False

    def close(self):
        """Close Redis connection."""
        if self._client:
            self._client.close()
            self._client = None
