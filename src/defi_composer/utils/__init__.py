"""
Utilities shared across the composer: logging facade.
"""
from defi_composer.utils.message import Log, init_logger

__all__ = ['Log', 'init_logger']
