from shortlinks.dao.redis.redis_key_schema import RedisKeySchema
from shortlinks.dao.redis.url_mapping_redis_dao import URLMappingRedisDAO
from shortlinks.dao.redis.mixins import RedisClientMixin


__all__ = [
    'RedisKeySchema',
    'URLMappingRedisDAO',
    'RedisClientMixin',
]
