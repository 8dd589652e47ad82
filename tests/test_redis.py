"""Catalog cache client: disabled without a URL, tolerant of Redis outages."""

from redis.exceptions import ConnectionError as RedisConnectionError

from gtonline.core.redis import RedisClient


class DownRedis:
    async def get(self, key):
        raise RedisConnectionError("connection refused")

    async def set(self, key, value, ex=None):
        raise RedisConnectionError("connection refused")


class DictRedis:
    def __init__(self):
        self.values = {}
        self.ttl = {}

    async def get(self, key):
        return self.values.get(key)

    async def set(self, key, value, ex=None):
        self.values[key] = value
        self.ttl[key] = ex
        return True


async def test_client_without_url_stays_disabled():
    client = RedisClient("")
    await client.connect()

    assert not client.enabled
    assert await client.get_json("catalog:schools") is None
    assert await client.set_json("catalog:schools", []) is False
    assert await client.ping() is False


async def test_json_round_trip_with_expiry():
    client = RedisClient("redis://cache")
    client.redis = DictRedis()

    assert await client.set_json("catalog:employers", [{"employer_name": "Acme"}], expire=60)
    assert await client.get_json("catalog:employers") == [{"employer_name": "Acme"}]
    assert client.redis.ttl["catalog:employers"] == 60


async def test_outage_reads_as_cache_miss():
    client = RedisClient("redis://cache")
    client.redis = DownRedis()

    assert await client.get_json("catalog:schools") is None
    assert await client.set_json("catalog:schools", []) is False
