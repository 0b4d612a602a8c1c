"""
Application layer for connections feature.
"""
from defi_composer.features.connections.application.connection_resolver import ConnectionResolver

__all__ = [
    'ConnectionResolver',
]
