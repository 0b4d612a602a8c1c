"""
Move formatter

Renders a ModuleIR to Move source text. Does not parse or check what it
emits.
"""
from typing import List, Optional

from defi_composer.features.codegen.domain import FunctionIR, ModuleIR, StatementIR, StructIR


class MoveFormatter:
    """
    Formats Move modules.

    Layout:
        // header comment

        module <address>::<name> {
            use ...;

            struct ... has key { ... }

            public fun ...(...) { ... }
        }
    """

    def __init__(self, indent: int = 4):
        self.indent = indent

    def _pad(self, level: int) -> str:
        return " " * (self.indent * level)

    @staticmethod
    def _line(text: str, comment: Optional[str] = None) -> str:
        return f"{text} // {comment}" if comment else text

    def format_struct(self, struct: StructIR, level: int = 1) -> List[str]:
        lines = []
        if struct.comment:
            lines.append(f"{self._pad(level)}// {struct.comment}")
        abilities = f" has {', '.join(struct.abilities)}" if struct.abilities else ""
        lines.append(f"{self._pad(level)}struct {struct.name}{abilities} {{")
        for field in struct.fields:
            lines.append(self._pad(level + 1) + self._line(f"{field.name}: {field.type},", field.comment))
        lines.append(f"{self._pad(level)}}}")
        return lines

    def format_statement(self, statement: StatementIR, level: int) -> str:
        return self._pad(level + statement.depth) + self._line(statement.text, statement.comment)

    def format_function(self, function: FunctionIR, level: int = 1) -> List[str]:
        lines = []
        if function.comment:
            lines.append(f"{self._pad(level)}// {function.comment}")
        lines.append(f"{self._pad(level)}{function.signature} {{")
        for statement in function.body:
            lines.append(self.format_statement(statement, level + 1))
        lines.append(f"{self._pad(level)}}}")
        return lines

    def format_module(self, module: ModuleIR) -> str:
        lines: List[str] = []
        if module.header_comment:
            lines.append(f"// {module.header_comment}")
            lines.append("")

        lines.append(f"module {module.qualified_name} {{")

        blocks: List[List[str]] = []
        if module.imports:
            blocks.append([f"{self._pad(1)}use {path};" for path in module.imports])
        blocks.extend(self.format_struct(struct) for struct in module.structs)
        blocks.extend(self.format_function(function) for function in module.functions)

        for index, block in enumerate(blocks):
            if index:
                lines.append("")
            lines.extend(block)

        lines.append("}")
        return "\n".join(lines) + "\n"
