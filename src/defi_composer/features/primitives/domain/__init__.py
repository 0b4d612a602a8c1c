"""
Domain layer for primitives feature.

Contains:
- Primitive entity
- Port entity and PortDirection
- PrimitiveKind, PrimitiveTemplate and PortSchema
- ParameterDefinition and ParameterConstraints
"""
from defi_composer.features.primitives.domain.port_direction import PortDirection
from defi_composer.features.primitives.domain.port import Port
from defi_composer.features.primitives.domain.parameter import ParameterConstraints, ParameterDefinition
from defi_composer.features.primitives.domain.primitive_template import PortSchema, PrimitiveKind, PrimitiveTemplate
from defi_composer.features.primitives.domain.primitive import Primitive

__all__ = [
    'PortDirection',
    'Port',
    'ParameterConstraints',
    'ParameterDefinition',
    'PortSchema',
    'PrimitiveKind',
    'PrimitiveTemplate',
    'Primitive',
]
