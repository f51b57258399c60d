"""Unit tests for RedisKeySchema

Test coverage includes:
    1. Prefix handling
    2. Link keys
    3. Original URL index keys
"""

import pytest
import xxhash

from linktracker.dao.redis import RedisKeySchema


def test_prefix_must_be_a_string():
    with pytest.raises(TypeError):
        RedisKeySchema(prefix=42)


def test_link_key_without_prefix():
    assert RedisKeySchema().link_key('aBsJu') == 'links:aBsJu'


def test_link_key_with_prefix():
    assert RedisKeySchema(prefix='linktracker:dev').link_key('aBsJu') == 'linktracker:dev:links:aBsJu'


def test_original_url_key_uses_fixed_size_digest():
    keys = RedisKeySchema(prefix='linktracker:dev')
    long_url = 'https://example.com/' + 'a' * 4096
    digest = xxhash.xxh64_hexdigest(long_url)

    assert keys.original_url_key(long_url) == f'linktracker:dev:links:url:{digest}'
    assert len(keys.original_url_key(long_url)) < 64


def test_original_url_keys_differ_per_url():
    keys = RedisKeySchema()
    assert keys.original_url_key('https://a.test') != keys.original_url_key('https://b.test')
