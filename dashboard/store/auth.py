"""Bearer-token resolution against the hosted auth provider."""

import asyncio
import json
import logging
from typing import Any, Dict, Iterable, Optional

import aiohttp
from pydantic import BaseModel, Field

from dashboard.config import Settings
from dashboard.exceptions import PostgrestError

logger = logging.getLogger(__name__)


class AuthSession(BaseModel):
    """An authenticated session as issued by the auth provider."""
    access_token: str
    user_id: str
    email: Optional[str] = None
    role: Optional[str] = None
    user_metadata: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_user_payload(cls, access_token: str, payload: Dict[str, Any]) -> "AuthSession":
        metadata = payload.get("user_metadata") or {}
        return cls(
            access_token=access_token,
            user_id=str(payload.get("id", "")),
            email=payload.get("email"),
            role=metadata.get("role"),
            user_metadata=metadata,
        )


def is_admin(session: Optional[AuthSession], admin_roles: Iterable[str]) -> bool:
    """The only authorization rule: the role claim must be an admin role."""
    if session is None or not session.role:
        return False
    return session.role in set(admin_roles)


class AuthClient:
    """Looks up the user behind an access token."""

    def __init__(self, base_url: str, api_key: str, timeout: int = 15):
        self.user_url = f"{base_url.rstrip('/')}/auth/v1/user"
        self.api_key = api_key
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "AuthClient":
        return cls(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY, settings.STORE_TIMEOUT)

    async def get_session(self, access_token: str) -> Optional[AuthSession]:
        """
        Resolve an access token into a session.

        Args:
            access_token: JWT issued by the auth provider

        Returns:
            AuthSession, or None when the provider rejects the token

        Raises:
            PostgrestError: If the provider cannot be reached or fails
        """
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {access_token}",
        }
        try:
            timeout = aiohttp.ClientTimeout(total=self.timeout)
            async with aiohttp.ClientSession(timeout=timeout) as http:
                async with http.request("GET", self.user_url, headers=headers) as response:
                    body = await response.text()
                    status = response.status
        except asyncio.TimeoutError:
            raise PostgrestError("Timed out contacting the auth provider")
        except aiohttp.ClientError as e:
            raise PostgrestError(f"Auth provider unreachable: {str(e)}")

        if status in (401, 403):
            logger.info("Auth provider rejected access token")
            return None
        if status != 200:
            raise PostgrestError(f"Auth provider returned HTTP {status}", status=status)

        try:
            payload = json.loads(body)
        except ValueError:
            payload = None
        if not isinstance(payload, dict):
            raise PostgrestError("Auth provider returned an unreadable user payload", status=status)

        return AuthSession.from_user_payload(access_token, payload)
