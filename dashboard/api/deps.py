"""Request dependencies: admin gate, per-request store handles, error mapping."""

from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from dashboard.config import get_settings
from dashboard.exceptions import (
    AccessDenied,
    ConstraintViolation,
    DuplicateKey,
    InvalidReference,
    MissingRequiredField,
    OperationInProgress,
    PostgrestError,
    RecordNotFound,
    StoreError,
    Unauthenticated,
)
from dashboard.logging_config import get_logger
from dashboard.services.inflight import InFlightGuard
from dashboard.store import AuthClient, AuthSession, RecordStoreGateway, StoreClient, is_admin

logger = get_logger("api.deps")

bearer_scheme = HTTPBearer(auto_error=False)

# One guard per process; the app runs on a single event loop
inflight_guard = InFlightGuard()

STATUS_BY_ERROR = {
    Unauthenticated: status.HTTP_401_UNAUTHORIZED,
    AccessDenied: status.HTTP_403_FORBIDDEN,
    RecordNotFound: status.HTTP_404_NOT_FOUND,
    DuplicateKey: status.HTTP_409_CONFLICT,
    OperationInProgress: status.HTTP_409_CONFLICT,
    InvalidReference: status.HTTP_422_UNPROCESSABLE_ENTITY,
    MissingRequiredField: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ConstraintViolation: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def http_error(error: StoreError) -> HTTPException:
    """Translate a store error into the HTTP error shown in the dashboard banner."""
    code = STATUS_BY_ERROR.get(type(error), status.HTTP_502_BAD_GATEWAY)
    return HTTPException(status_code=code, detail=str(error))


def get_auth_client() -> AuthClient:
    return AuthClient.from_settings(get_settings())


async def get_current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth_client: AuthClient = Depends(get_auth_client),
) -> AuthSession:
    if credentials is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated. Please log in again.")
    try:
        session = await auth_client.get_session(credentials.credentials)
    except PostgrestError as e:
        logger.error(f"Auth provider lookup failed: {str(e)}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Auth provider unavailable")
    if session is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated. Please log in again.")
    return session


def require_admin(
    request: Request,
    session: AuthSession = Depends(get_current_session),
) -> AuthSession:
    if not is_admin(session, get_settings().ADMIN_ROLES):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    request.state.admin_email = session.email
    return session


def get_store_client(session: AuthSession = Depends(require_admin)) -> StoreClient:
    return StoreClient.from_settings(get_settings(), session)


def get_gateway(client: StoreClient = Depends(get_store_client)) -> RecordStoreGateway:
    return RecordStoreGateway(client)


def get_inflight_guard() -> InFlightGuard:
    return inflight_guard
