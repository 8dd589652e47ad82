import redis.asyncio as redis
from redis.exceptions import RedisError
from typing import Any, Optional
import json
import logging

logger = logging.getLogger(__name__)


class RedisClient:
    """Thin async Redis wrapper; every call is a no-op until connect() succeeds"""

    def __init__(self, url: str = ""):
        self.url = url
        self.redis: Optional[redis.Redis] = None

    async def connect(self):
        """Connect to Redis"""
        if not self.url:
            return
        self.redis = redis.from_url(
            self.url,
            encoding="utf-8",
            decode_responses=True
        )

    async def disconnect(self):
        """Disconnect from Redis"""
        if self.redis:
            await self.redis.aclose()
            self.redis = None

    @property
    def enabled(self) -> bool:
        return self.redis is not None

    async def ping(self) -> bool:
        if not self.redis:
            return False
        return await self.redis.ping()

    async def get(self, key: str) -> Optional[str]:
        """Get value from Redis"""
        if not self.redis:
            return None
        return await self.redis.get(key)

    async def set(self, key: str, value: str, expire: int = 3600) -> bool:
        """Set value in Redis with expiration"""
        if not self.redis:
            return False
        return await self.redis.set(key, value, ex=expire)

    async def get_json(self, key: str) -> Optional[Any]:
        """Get JSON value from Redis, None on a miss or an unreachable server"""
        try:
            value = await self.get(key)
        except RedisError as e:
            logger.warning(f"Redis get failed for {key}: {e}")
            return None
        if value:
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                return None
        return None

    async def set_json(self, key: str, value: Any, expire: int = 3600) -> bool:
        """Set JSON value in Redis"""
        try:
            json_str = json.dumps(value)
            return await self.set(key, json_str, expire)
        except (TypeError, ValueError):
            return False
        except RedisError as e:
            logger.warning(f"Redis set failed for {key}: {e}")
            return False
