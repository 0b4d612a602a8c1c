"""
Domain layer for connections feature.

Contains:
- Connection entity
- ConnectionAttempt and ConnectionFailure
"""
from defi_composer.features.connections.domain.connection import Connection
from defi_composer.features.connections.domain.connection_attempt import ConnectionAttempt, ConnectionFailure

__all__ = [
    'Connection',
    'ConnectionAttempt',
    'ConnectionFailure',
]
