# classstore/services/rate_limit_service.py
import redis

from classstore.utils.retry import redis_retry
from classstore.utils.settings import REDIS_URL, RATE_LIMIT_PER_MINUTE, RATE_LIMIT_WINDOW_SECONDS
from classstore.utils.logging import get_logger

logger = get_logger(__name__)

# INCR + EXPIRE in one script: the window starts with the first hit and
# the key can never be left without a TTL
_HIT_LUA = """
local count = redis.call('INCR', KEYS[1])
if count == 1 then
    redis.call('EXPIRE', KEYS[1], ARGV[1])
end
return {count, redis.call('TTL', KEYS[1])}
"""


class RateLimitService:
    """
    Fixed-window request counter per client, shared by every app instance
    through Redis.
    """

    def __init__(
        self,
        client: redis.Redis | None = None,
        limit: int | None = None,
        window: int | None = None,
    ):
        self.redis = client or redis.Redis.from_url(REDIS_URL, decode_responses=True)
        self.limit = RATE_LIMIT_PER_MINUTE if limit is None else limit
        self.window = window or RATE_LIMIT_WINDOW_SECONDS

    @property
    def enabled(self) -> bool:
        return self.limit > 0

    @redis_retry()
    def _hit(self, key: str) -> tuple[int, int]:
        count, ttl = self.redis.eval(_HIT_LUA, 1, key, self.window)
        return int(count), int(ttl)

    def check(self, client_id: str) -> tuple[bool, int]:
        """
        Registers one request. Returns (allowed, retry_after_seconds).
        Redis being unavailable lets the request through.
        """
        if not self.enabled:
            return True, 0

        key = f"ratelimit:{client_id}"
        try:
            count, ttl = self._hit(key)
        except redis.RedisError as e:
            logger.warning(f"Rate limit check skipped for {client_id}: {e}")
            return True, 0

        if count > self.limit:
            retry_after = ttl if ttl > 0 else self.window
            logger.info(f"Rate limit exceeded for {client_id} ({count}/{self.limit})")
            return False, retry_after

        return True, 0
