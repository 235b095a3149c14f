"""Access to the hosted record store (PostgREST tables + auth provider)."""

from .auth import AuthClient, AuthSession, is_admin
from .client import StoreClient
from .gateway import RecordStoreGateway

__all__ = ['AuthClient', 'AuthSession', 'is_admin', 'StoreClient', 'RecordStoreGateway']
