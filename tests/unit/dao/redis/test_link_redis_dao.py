"""Unit tests for the LinkRedisDAO

Test coverage includes:

1. Insertion behavior
   - Validates inserting a link stores its hash and registers the original URL index.
   - Ensures unset optional fields are left out of the stored hash.
   - Confirms duplicate codes raise RecordAlreadyExistsError without writing.
   - Ensures invalid types raise TypeError or BeartypeCallHintParamViolation.
   - Confirms Redis connection errors raise DataStoreError.

2. Lookup behavior
   - Ensures lookups by code and by original URL return populated LinkModels.
   - Confirms criteria that don't match return None.
   - Confirms unsupported criteria raise ValueError.

3. Patch behavior
   - Patching sets only the given fields.
   - Patching is a no-op returning False when the link doesn't exist.

4. Redirect counter
   - Ensures the counter is incremented with HINCRBY.
   - Confirms missing links raise RecordNotFoundError.
"""

import re
from datetime import datetime, UTC

import pytest
import redis
from beartype.roar import BeartypeCallHintParamViolation

from linktracker.models import LinkModel
from linktracker.dao.exceptions import DataStoreError, RecordAlreadyExistsError, RecordNotFoundError
from linktracker.dao.redis import LinkRedisDAO


LINK_KEY = 'testapp:test:links:aBsJu'


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def dao(redis_client, app_prefix):
    """Create a LinkRedisDAO instance with a mocked Redis client."""
    return LinkRedisDAO(redis_client=redis_client, prefix=app_prefix)


@pytest.fixture
def url_key(dao):
    return dao.keys.original_url_key('https://example.com/test')


@pytest.fixture
def link():
    return LinkModel(
        code='aBsJu',
        original_url='https://example.com/test',
        masked_link='http://localhost:3000/aBsJu',
    )


@pytest.fixture
def stored_hash():
    return {
        'code': 'aBsJu',
        'original_url': 'https://example.com/test',
        'masked_link': 'http://localhost:3000/aBsJu',
        'password': '12345',
        'expiration_date': '2027-01-01T00:00:00+00:00',
        'redirect_count': '7',
        'is_valid': '1',
    }


# -------------------------------
# 1. Insertion behavior
# -------------------------------


def test_insert_link(dao, redis_client, link, url_key):
    """Ensure a new link is stored as a hash and indexed by original URL."""
    redis_client.exists.return_value = False

    assert dao.insert(link) is link

    redis_client.transaction.assert_called_once()
    assert redis_client.transaction.call_args.args[1:] == (LINK_KEY,)
    redis_client.exists.assert_called_once_with(LINK_KEY)
    redis_client.multi.assert_called_once()
    redis_client.hset.assert_called_once_with(
        LINK_KEY,
        mapping={
            'code': 'aBsJu',
            'original_url': 'https://example.com/test',
            'masked_link': 'http://localhost:3000/aBsJu',
            'redirect_count': 0,
            'is_valid': 1,
        },
    )
    redis_client.sadd.assert_called_once_with(url_key, 'aBsJu')


def test_insert_link_with_optional_fields(dao, redis_client):
    redis_client.exists.return_value = False
    link = LinkModel(
        code='aBsJu',
        original_url='https://example.com/test',
        masked_link='http://localhost:3000/aBsJu',
        password='12345',
        expiration_date=datetime(2027, 1, 1, tzinfo=UTC),
    )

    dao.insert(link)

    mapping = redis_client.hset.call_args.kwargs['mapping']
    assert mapping['password'] == '12345'
    assert mapping['expiration_date'] == '2027-01-01T00:00:00+00:00'


def test_insert_link_which_already_exists(dao, redis_client, link):
    """Ensure duplicate codes raise RecordAlreadyExistsError and nothing is written."""
    redis_client.exists.return_value = True

    with pytest.raises(RecordAlreadyExistsError, match=re.escape("Link with code 'aBsJu' already exists.")):
        dao.insert(link)

    redis_client.hset.assert_not_called()
    redis_client.sadd.assert_not_called()


def test_insert_link_with_invalid_type(dao):
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.insert('https://example.com/notamodel')


def test_insert_link_with_redis_connection_error(dao, redis_client, link):
    redis_client.transaction.side_effect = redis.exceptions.ConnectionError('Connection error')

    with pytest.raises(DataStoreError, match="Can't connect to Redis at 203.0.113.1:18000/5."):
        dao.insert(link)


# -------------------------------
# 2. Lookup behavior
# -------------------------------


def test_find_one_by_code(dao, redis_client, stored_hash):
    redis_client.execute.return_value = [stored_hash]

    link = dao.find_one(code='aBsJu')

    redis_client.hgetall.assert_called_once_with(LINK_KEY)
    assert link == LinkModel(
        code='aBsJu',
        original_url='https://example.com/test',
        masked_link='http://localhost:3000/aBsJu',
        password='12345',
        expiration_date=datetime(2027, 1, 1, tzinfo=UTC),
        redirect_count=7,
        is_valid=True,
    )


def test_find_one_by_code_which_does_not_exist(dao, redis_client):
    redis_client.execute.return_value = [{}]
    assert dao.find_one(code='aBsJu') is None


def test_find_one_by_original_url(dao, redis_client, stored_hash, url_key):
    """Ensure lookups by URL go through the index and filter on every criterion."""
    invalid_hash = {**stored_hash, 'code': 'Zzzzz', 'is_valid': '0'}
    redis_client.smembers.return_value = {'Zzzzz', 'aBsJu'}
    redis_client.execute.return_value = [invalid_hash, stored_hash]

    link = dao.find_one(original_url='https://example.com/test', is_valid=True)

    redis_client.smembers.assert_called_once_with(url_key)
    assert link.code == 'aBsJu'


def test_find_one_by_original_url_without_match(dao, redis_client, stored_hash):
    redis_client.smembers.return_value = {'aBsJu'}
    redis_client.execute.return_value = [{**stored_hash, 'is_valid': '0'}]

    assert dao.find_one(original_url='https://example.com/test', is_valid=True) is None


def test_find_one_by_unindexed_original_url(dao, redis_client):
    redis_client.smembers.return_value = set()

    assert dao.find_one(original_url='https://example.com/unknown') is None
    redis_client.hgetall.assert_not_called()


def test_find_one_decodes_absent_optional_fields(dao, redis_client, stored_hash):
    del stored_hash['password']
    del stored_hash['expiration_date']
    redis_client.execute.return_value = [stored_hash]

    link = dao.find_one(code='aBsJu')

    assert link.password is None
    assert link.expiration_date is None


@pytest.mark.parametrize('criteria', [{'is_valid': True}, {'masked_link': 'http://localhost:3000/aBsJu'}, {'unknown': 1}])
def test_find_one_with_unsupported_criteria(dao, criteria):
    with pytest.raises(ValueError):
        dao.find_one(**criteria)


def test_find_one_with_redis_connection_error(dao, redis_client):
    redis_client.execute.side_effect = redis.exceptions.ConnectionError('Connection error')

    with pytest.raises(DataStoreError, match="Can't connect to Redis at 203.0.113.1:18000/5."):
        dao.find_one(code='aBsJu')


# -------------------------------
# 3. Patch behavior
# -------------------------------


def test_update_link(dao, redis_client):
    """Ensure patches set only the given fields."""
    assert dao.update('aBsJu', is_valid=False) is True

    redis_client.hset.assert_called_once_with(LINK_KEY, mapping={'is_valid': 0})
    redis_client.hdel.assert_not_called()


def test_update_link_unsets_optional_fields(dao, redis_client):
    assert dao.update('aBsJu', password=None) is True

    redis_client.hset.assert_not_called()
    redis_client.hdel.assert_called_once_with(LINK_KEY, 'password')


def test_update_link_which_does_not_exist(dao, redis_client):
    """Ensure patching a missing link writes nothing (no partial hash)."""
    redis_client.exists.return_value = False

    assert dao.update('nope1', is_valid=False) is False
    redis_client.hset.assert_not_called()


@pytest.mark.parametrize('fields', [{}, {'code': 'other'}, {'original_url': None}, {'unknown': 1}])
def test_update_link_with_invalid_fields(dao, fields):
    with pytest.raises(ValueError):
        dao.update('aBsJu', **fields)


# -------------------------------
# 4. Redirect counter
# -------------------------------


def test_increment_redirect_count(dao, redis_client):
    redis_client.execute.return_value = [8]

    assert dao.increment_redirect_count('aBsJu') == 8
    redis_client.hincrby.assert_called_once_with(LINK_KEY, 'redirect_count', 1)


def test_increment_redirect_count_of_missing_link(dao, redis_client):
    redis_client.exists.return_value = False

    with pytest.raises(RecordNotFoundError, match="Link with code 'aBsJu' not found."):
        dao.increment_redirect_count('aBsJu')

    redis_client.hincrby.assert_not_called()


def test_increment_redirect_count_with_invalid_type(dao):
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.increment_redirect_count(12345)
