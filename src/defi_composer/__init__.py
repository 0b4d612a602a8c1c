"""
DeFi Composer

Compose DeFi primitives (lending pool, AMM pool, staking pool, yield
vault) into a graph of typed ports, validate it and generate a Move
module from it.
"""
from defi_composer.application.api import CompositionEngine
from defi_composer.application.settings import EngineSettings, GeneratorSettings
from defi_composer.features.primitives.application import get_primitive_registry
from defi_composer.features.primitives.domain import PrimitiveKind

__version__ = "0.1.0"

__all__ = [
    'CompositionEngine',
    'EngineSettings',
    'GeneratorSettings',
    'get_primitive_registry',
    'PrimitiveKind',
    '__version__',
]
