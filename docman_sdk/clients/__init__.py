# docman_sdk/clients/__init__.py
from .auth import CredentialProvider, StaticCredentialProvider, CallableCredentialProvider
from .base import RemoteServiceClient

__all__ = [
    "CredentialProvider",
    "StaticCredentialProvider",
    "CallableCredentialProvider",
    "RemoteServiceClient",
]
