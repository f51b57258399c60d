from linktracker.dao.redis.redis_key_schema import RedisKeySchema
from linktracker.dao.redis.link_redis_dao import LinkRedisDAO
from linktracker.dao.redis.mixins import RedisClientMixin


__all__ = [
    'RedisKeySchema',
    'LinkRedisDAO',
    'RedisClientMixin',
]
