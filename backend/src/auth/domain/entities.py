from dataclasses import dataclass
from uuid import UUID


@dataclass
class User:
    id: UUID
    email: str


@dataclass
class Session:
    access_token: str
    refresh_token: str
    expires_at: int
    user: User
