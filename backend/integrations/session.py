"""
Explicit session context for the marketplace API client.

Every client call receives an ApiSession instead of reading the logged-in
user, token or selected establishment from module globals.
"""
import os
from dataclasses import dataclass, replace
from typing import Dict, Optional

from dotenv import load_dotenv

DEFAULT_API_URL = "http://127.0.0.1:8000/api"
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class ApiSession:
    base_url: str
    token: Optional[str] = None
    client_id: Optional[int] = None
    establishment_id: Optional[int] = None
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self):
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_env(cls, **overrides) -> "ApiSession":
        """Build a session from MARKETPLACE_API_URL / MARKETPLACE_API_TIMEOUT."""
        load_dotenv()
        values = {
            "base_url": os.environ.get("MARKETPLACE_API_URL", DEFAULT_API_URL),
            "timeout": float(os.environ.get("MARKETPLACE_API_TIMEOUT", DEFAULT_TIMEOUT)),
        }
        values.update(overrides)
        return cls(**values)

    def with_token(self, token: str, client_id: Optional[int] = None,
                   establishment_id: Optional[int] = None) -> "ApiSession":
        return replace(
            self,
            token=token,
            client_id=client_id if client_id is not None else self.client_id,
            establishment_id=establishment_id if establishment_id is not None else self.establishment_id,
        )

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def require_establishment(self) -> int:
        if self.establishment_id is None:
            raise ValueError("This session is not bound to an establishment")
        return self.establishment_id

    def require_client(self) -> int:
        if self.client_id is None:
            raise ValueError("This session is not bound to a client")
        return self.client_id
