import json
import secrets
from dataclasses import asdict
from uuid import UUID

from redis.asyncio import Redis

from auth.domain.entities import Session, User


def _session_key(session_id: str) -> str:
    return f"session:{session_id}"


def _flow_key(flow_id: str) -> str:
    return f"auth-flow:{flow_id}"


class RedisSessionStore:
    """Server-side sessions keyed by an opaque id held in the browser cookie."""

    def __init__(self, redis: Redis, ttl_seconds: int, flow_ttl_seconds: int):
        self.redis = redis
        self.ttl_seconds = ttl_seconds
        self.flow_ttl_seconds = flow_ttl_seconds

    async def create(self, session: Session) -> str:
        session_id = secrets.token_urlsafe(32)
        await self.update(session_id, session)
        return session_id

    async def get(self, session_id: str) -> Session | None:
        raw = await self.redis.get(_session_key(session_id))
        return _decode(raw) if raw else None

    async def update(self, session_id: str, session: Session) -> None:
        await self.redis.set(
            _session_key(session_id), _encode(session), ex=self.ttl_seconds
        )

    async def delete(self, session_id: str) -> None:
        await self.redis.delete(_session_key(session_id))

    async def save_flow(self, code_verifier: str) -> str:
        flow_id = secrets.token_urlsafe(16)
        await self.redis.set(_flow_key(flow_id), code_verifier, ex=self.flow_ttl_seconds)
        return flow_id

    async def pop_flow(self, flow_id: str) -> str | None:
        raw = await self.redis.getdel(_flow_key(flow_id))
        if raw is None:
            return None
        return raw.decode() if isinstance(raw, bytes) else raw


def _encode(session: Session) -> str:
    data = asdict(session)
    data["user"]["id"] = str(session.user.id)
    return json.dumps(data)


def _decode(raw: bytes | str) -> Session:
    data = json.loads(raw)
    user = data.pop("user")
    return Session(**data, user=User(id=UUID(user["id"]), email=user["email"]))
