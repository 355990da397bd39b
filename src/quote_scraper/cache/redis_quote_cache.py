import json
import logging
import re
from dataclasses import asdict
from datetime import datetime, timedelta, timezone
from typing import Optional

from redis import Redis  # type: ignore[import]
from redis.exceptions import RedisError  # type: ignore[import]

from quote_scraper.domain.models import QuoteRecord

LOGGER = logging.getLogger(__name__)


class RedisQuoteCache:
    CACHE_VERSION = 1

    def __init__(
        self,
        redis_url: str,
        key_prefix: str = "quote_scraper:quotes",
        client: Optional[Redis] = None,
    ) -> None:
        self._key_prefix = key_prefix.rstrip(":") or "quote_scraper:quotes"
        self._client = client or Redis.from_url(redis_url, decode_responses=True)

    def load(self, symbol: str, ttl_minutes: int) -> Optional[QuoteRecord]:
        key = self._cache_key(symbol)
        try:
            payload_raw = self._client.get(key)
        except RedisError as exc:
            LOGGER.warning("Failed to read Redis cache (%s): %s", key, exc)
            return None

        if not payload_raw:
            return None

        try:
            payload = json.loads(payload_raw)
        except ValueError:
            LOGGER.warning("Invalid payload in Redis cache (%s).", key)
            return None

        if not isinstance(payload, dict):
            LOGGER.warning("Unexpected payload type in Redis cache (%s).", key)
            return None

        if payload.get("version") != self.CACHE_VERSION:
            return None

        created_at_raw = payload.get("created_at")
        if not created_at_raw:
            return None

        try:
            created_at = datetime.fromisoformat(created_at_raw)
        except (TypeError, ValueError):
            return None

        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)

        ttl = timedelta(minutes=max(ttl_minutes, 0))
        if datetime.now(timezone.utc) - created_at > ttl:
            return None

        record = payload.get("record")
        if not isinstance(record, dict):
            LOGGER.warning("Unexpected record in Redis cache (%s).", key)
            return None

        return QuoteRecord(
            symbol=str(record.get("symbol", symbol)).strip(),
            company=str(record.get("company", "")).strip(),
            price=str(record.get("price", "")).strip(),
            change=str(record.get("change", "")).strip(),
        )

    def save(self, symbol: str, record: QuoteRecord) -> str:
        key = self._cache_key(symbol)
        payload = {
            "version": self.CACHE_VERSION,
            "symbol": symbol,
            "created_at": datetime.now(timezone.utc).isoformat(),
            "record": asdict(record),
        }

        try:
            self._client.set(
                key,
                json.dumps(payload, ensure_ascii=False, separators=(",", ":")),
            )
        except RedisError as exc:
            LOGGER.warning("Failed to write Redis cache (%s): %s", key, exc)

        return key

    def _cache_key(self, symbol: str) -> str:
        return "{0}:{1}".format(self._key_prefix, self._normalize_symbol(symbol))

    def _normalize_symbol(self, symbol: str) -> str:
        normalized = symbol.strip().lower()
        normalized = re.sub(r"[^a-z0-9]+", "_", normalized)
        normalized = normalized.strip("_")
        return normalized or "unknown_symbol"
