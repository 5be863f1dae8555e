"""Home aggregate cache record in Kvrocks (one JSON string under one key)"""

from typing import Optional

import orjson
from redis.exceptions import RedisError

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.platform.state.kvrocks_client import kvrocks_client, make_key
from src.service.cinema.app.interface.i_read_model_cache_store import IReadModelCacheStore
from src.service.cinema.domain.entity.home_aggregate import HomeAggregate


class ReadModelCacheStoreImpl(IReadModelCacheStore):
    def __init__(self, *, cache_key: str = settings.READ_MODEL_CACHE_KEY) -> None:
        self._key = make_key(cache_key)

    async def load(self) -> Optional[HomeAggregate]:
        try:
            raw = await kvrocks_client.get_client().get(self._key)
        except (RedisError, RuntimeError) as e:
            Logger.base.warning(f'💾 [READ_MODEL_CACHE] Load failed, treating as miss: {e}')
            return None

        if not raw:
            return None

        try:
            return HomeAggregate.from_dict(orjson.loads(raw))
        except (ValueError, KeyError, TypeError) as e:
            Logger.base.warning(f'💾 [READ_MODEL_CACHE] Malformed record, treating as miss: {e}')
            return None

    async def save(self, aggregate: HomeAggregate) -> None:
        payload = orjson.dumps(aggregate.to_dict())
        try:
            await kvrocks_client.get_client().set(self._key, payload)
        except (RedisError, RuntimeError) as e:
            # The freshly computed aggregate is still served; only reuse is lost
            Logger.base.warning(f'💾 [READ_MODEL_CACHE] Save failed: {e}')
            return
        Logger.base.debug(f'💾 [READ_MODEL_CACHE] Saved {len(payload)} bytes to {self._key}')
