import logging
import threading

import redis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when the thanks store cannot be reached."""


class ThanksStore:
    """
    Key-value store holding one decimal counter string per user id.

    Subclasses implement ``get`` and ``put``. ``increment`` falls back to a
    read-modify-write, which loses updates under concurrent writers; stores
    with an atomic increment override it.
    """

    def get(self, key):
        raise NotImplementedError

    def put(self, key, value):
        raise NotImplementedError

    def increment(self, key):
        new_value = parse_count(self.get(key)) + 1
        self.put(key, str(new_value))
        return new_value


class MemoryThanksStore(ThanksStore):
    """Process-local store, for development and tests."""

    def __init__(self, data=None):
        self._data = dict(data or {})
        self._lock = threading.Lock()

    def get(self, key):
        return self._data.get(key)

    def put(self, key, value):
        self._data[key] = value

    def increment(self, key):
        with self._lock:
            return super().increment(key)


class RedisThanksStore(ThanksStore):
    """Redis-backed store. Keys are prefixed with the namespace."""

    def __init__(self, client, namespace="prod_thanks"):
        self.client = client
        self.namespace = namespace

    @classmethod
    def from_url(cls, url, namespace="prod_thanks"):
        client = redis.from_url(
            url,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_keepalive=True,
            health_check_interval=30,
        )
        logger.info(f"Using Redis thanks store with namespace '{namespace}'.")
        return cls(client, namespace)

    def _key(self, key):
        return f"{self.namespace}:{key}"

    def get(self, key):
        try:
            return self.client.get(self._key(key))
        except RedisError as e:
            logger.error(f"Failed to read thanks for {key}: {e}")
            raise StoreError(str(e)) from e

    def put(self, key, value):
        try:
            self.client.set(self._key(key), value)
        except RedisError as e:
            logger.error(f"Failed to write thanks for {key}: {e}")
            raise StoreError(str(e)) from e

    def increment(self, key):
        try:
            return int(self.client.incr(self._key(key)))
        except RedisError as e:
            logger.error(f"Failed to increment thanks for {key}: {e}")
            raise StoreError(str(e)) from e


def parse_count(value):
    """Converts a stored counter string to an int; missing reads as 0."""
    if not value:
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.error(f"Stored thanks count is not a number: {value!r}")
        raise StoreError(f"Corrupt thanks count {value!r}")


def check_my_thanks(store, user_id):
    """
    Returns how many thanks a user has received.

    Args:
        store (ThanksStore): The thanks store.
        user_id (str): Discord user ID.

    Returns:
        int: The user's thanks count.
    """
    return parse_count(store.get(user_id))


def increment_thanked_user(store, user_id):
    """
    Adds one thanks to a user's counter.

    Args:
        store (ThanksStore): The thanks store.
        user_id (str): Discord user ID of the thanked user.

    Returns:
        int: The new thanks count.
    """
    new_value = store.increment(user_id)
    logger.info(f"User {user_id} now has {new_value} thanks.")
    return new_value
