"""
Code Generator

Turns a composition snapshot into Move source text.

The generator is pure and deterministic: the same snapshot and settings
always produce the same text. Primitives are visited in insertion order;
all structs are emitted first, then all functions. Connections are not
read: each primitive compiles to a self-contained resource.
"""
from dataclasses import replace
import re
from typing import Optional

from defi_composer.application.settings.engine_settings import GeneratorSettings
from defi_composer.features.codegen.application.move_formatter import MoveFormatter
from defi_composer.features.codegen.application.move_templates import KIND_TEMPLATES, PrimitiveParameters
from defi_composer.features.codegen.domain import ModuleIR
from defi_composer.features.compositions.domain.composition import Composition
from defi_composer.features.primitives.application.primitive_registry import (
    PrimitiveRegistry,
    get_primitive_registry,
)
from defi_composer.utils.message import Log

HEADER_COMMENT = "Generated Move code for composition: {name}"
FALLBACK_MODULE_NAME = "composition"


def module_name_for(name: str) -> str:
    """
    Normalize a composition name to a lowercase Move identifier.

    "My DeFi Protocol" -> "my_defi_protocol", "2x Pool" -> "m_2x_pool"
    """
    identifier = re.sub(r"[^a-z0-9]+", "_", (name or "").lower()).strip("_")
    if not identifier:
        return FALLBACK_MODULE_NAME
    if identifier[0].isdigit():
        identifier = f"m_{identifier}"
    return identifier


class CodeGenerator:
    """
    Move code generator.

    Usage:
        generator = CodeGenerator(GeneratorSettings(module_address="defi"))
        source = generator.generate(store.composition)
    """

    def __init__(self, settings: Optional[GeneratorSettings] = None, registry: Optional[PrimitiveRegistry] = None):
        self.settings = settings or GeneratorSettings()
        self._registry = registry or get_primitive_registry()
        self._formatter = MoveFormatter(indent=self.settings.indent)

    def build_module(self, composition: Composition) -> ModuleIR:
        """Build the intermediate representation for a composition."""
        module = ModuleIR(
            name=module_name_for(composition.name),
            address=self.settings.module_address,
            imports=tuple(self.settings.framework_imports),
            header_comment=(
                HEADER_COMMENT.format(name=composition.name)
                if self.settings.include_header_comment else None
            ),
        )

        for primitive in composition.primitives.values():
            template_fn = KIND_TEMPLATES.get(primitive.kind)
            if template_fn is None:
                Log.warning(f"CodeGenerator: No Move template for kind '{primitive.kind.value}', skipping")
                continue

            params = PrimitiveParameters(primitive, self._registry.get(primitive.kind))
            struct, functions = template_fn(params)
            module.structs.append(replace(struct, comment=f"{primitive.label} ({primitive.kind.value})"))
            module.functions.extend(functions)

        return module

    def generate(self, composition: Composition) -> str:
        """
        Generate Move source for a composition.

        Returns:
            Module text ending with a newline
        """
        module = self.build_module(composition)
        code = self._formatter.format_module(module)
        Log.debug(
            f"CodeGenerator: Generated {len(code)} chars for '{composition.name}' "
            f"({len(module.structs)} struct(s), {len(module.functions)} function(s))"
        )
        return code


def generate_code(
    composition: Composition,
    settings: Optional[GeneratorSettings] = None,
    registry: Optional[PrimitiveRegistry] = None,
) -> str:
    """Generate Move source with a one-off generator."""
    return CodeGenerator(settings, registry).generate(composition)
