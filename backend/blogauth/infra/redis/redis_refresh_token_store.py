# blogauth/infra/redis/redis_refresh_token_store.py
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from datetime import timedelta

import redis  # type: ignore[import-untyped]

from blogauth.services._shared.ports import RefreshTokenRecord, RefreshTokenStore
from blogauth.services._shared.ports.refresh_token_store import token_not_found


@dataclass(slots=True)
class RedisRefreshTokenStore(RefreshTokenStore):
    """
    Redis-backed refresh token store.

    Layout
    ------
    - ``rt:u:<user_id>`` → current refresh token of the user.
    - ``rt:t:<sha256(token)>`` → owner user id (reverse index for lookups).

    Writes use WATCH/MULTI/EXEC on the keys they read, so concurrent saves and
    deletes serialize and the two keys never disagree. A token string belongs
    to the user who saved it last.

    :param r: A Redis client (already connected).
    :param ttl: Optional expiry applied to both keys (usually the refresh lifetime).
    """

    r: redis.Redis
    ttl: timedelta | None = None

    # -------------------- helpers --------------------

    @staticmethod
    def _ku(user_id: int) -> str:
        return f"rt:u:{user_id}"

    @staticmethod
    def _kt(token: str) -> str:
        digest = hashlib.sha256(token.encode("utf-8")).hexdigest()
        return f"rt:t:{digest}"

    @staticmethod
    def _s(value: bytes | str | None) -> str | None:
        if value is None:
            return None
        return value.decode() if isinstance(value, bytes | bytearray) else str(value)

    def _ex(self) -> int | None:
        if self.ttl is None:
            return None
        return max(1, int(self.ttl.total_seconds()))

    # -------------------- API ------------------------

    def find_by_token(self, token: str) -> RefreshTokenRecord:
        uid = self._s(self.r.get(self._kt(token)))
        if uid is None:
            raise token_not_found()
        # Reverse index may briefly outlive a replaced token; the user key is authoritative
        current = self._s(self.r.get(self._ku(int(uid))))
        if current != token:
            raise token_not_found()
        return RefreshTokenRecord(user_id=int(uid), refresh_token=token)

    def save(self, user_id: int, token: str) -> RefreshTokenRecord:
        k_user = self._ku(user_id)
        k_token = self._kt(token)
        owner = str(user_id)
        ex = self._ex()

        # Retry loop for optimistic locking in case of concurrent modifications
        while True:
            try:
                with self.r.pipeline() as p:
                    p.watch(k_user, k_token)
                    previous = self._s(p.get(k_user))
                    k_previous = self._kt(previous) if previous not in (None, token) else None
                    if k_previous is not None:
                        p.watch(k_previous)
                    previous_owner = self._s(p.get(k_previous)) if k_previous else None

                    # The last writer takes the token over from another user
                    holder = self._s(p.get(k_token))
                    k_holder = self._ku(int(holder)) if holder not in (None, owner) else None
                    if k_holder is not None:
                        p.watch(k_holder)
                    holder_token = self._s(p.get(k_holder)) if k_holder else None

                    p.multi()
                    if k_previous is not None and previous_owner == owner:
                        p.delete(k_previous)
                    if k_holder is not None and holder_token == token:
                        p.delete(k_holder)
                    p.set(k_user, token, ex=ex)
                    p.set(k_token, owner, ex=ex)
                    p.execute()
                return RefreshTokenRecord(user_id=user_id, refresh_token=token)
            except redis.WatchError:
                continue

    def delete_by_identity(self, user_id: int) -> None:
        k_user = self._ku(user_id)

        while True:
            try:
                with self.r.pipeline() as p:
                    p.watch(k_user)
                    previous = self._s(p.get(k_user))
                    if previous is None:
                        p.unwatch()
                        return
                    k_previous = self._kt(previous)
                    p.watch(k_previous)
                    previous_owner = self._s(p.get(k_previous))

                    p.multi()
                    p.delete(k_user)
                    # Leave the reverse key alone once another user took the token
                    if previous_owner == str(user_id):
                        p.delete(k_previous)
                    p.execute()
                return
            except redis.WatchError:
                continue
