from fastapi import Request
from redis import ConnectionPool, Redis


def create_cache_client(redis_url: str) -> Redis:
    pool = ConnectionPool.from_url(redis_url, decode_responses=True)
    return Redis(connection_pool=pool)


def close_cache_client(client: Redis) -> None:
    client.close()
    client.connection_pool.disconnect()


def get_cache(request: Request) -> Redis:
    return request.app.state.cache
