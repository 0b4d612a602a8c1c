"""
Move module intermediate representation

Structured description of a generated Move module. Per-kind templates
build these records from primitives; the formatter is the only code
that turns them into text.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class FieldIR:
    """Struct field, e.g. `interest_rate: u64, // 5%`"""
    name: str
    type: str
    comment: Optional[str] = None


@dataclass(frozen=True)
class StructIR:
    name: str
    fields: Tuple[FieldIR, ...] = ()
    abilities: Tuple[str, ...] = ("key",)
    comment: Optional[str] = None


@dataclass(frozen=True)
class ParamIR:
    name: str
    type: str


@dataclass(frozen=True)
class StatementIR:
    """
    One body line.

    Attributes:
        text: Code without indentation
        comment: Optional trailing comment
        depth: Extra indentation levels relative to the function body
    """
    text: str
    comment: Optional[str] = None
    depth: int = 0


@dataclass(frozen=True)
class FunctionIR:
    name: str
    params: Tuple[ParamIR, ...] = ()
    body: Tuple[StatementIR, ...] = ()
    acquires: Tuple[str, ...] = ()
    visibility: str = "public"
    comment: Optional[str] = None

    @property
    def signature(self) -> str:
        params = ", ".join(f"{p.name}: {p.type}" for p in self.params)
        prefix = f"{self.visibility} " if self.visibility else ""
        acquires = f" acquires {', '.join(self.acquires)}" if self.acquires else ""
        return f"{prefix}fun {self.name}({params}){acquires}"


@dataclass
class ModuleIR:
    """
    Whole module: header, imports, then every struct and every function
    in the order they were added.
    """
    name: str
    address: Optional[str] = None
    imports: Tuple[str, ...] = ()
    header_comment: Optional[str] = None
    structs: List[StructIR] = field(default_factory=list)
    functions: List[FunctionIR] = field(default_factory=list)

    @property
    def qualified_name(self) -> str:
        return f"{self.address}::{self.name}" if self.address else self.name

    def struct_names(self) -> List[str]:
        return [struct.name for struct in self.structs]

    def function_names(self) -> List[str]:
        return [function.name for function in self.functions]
