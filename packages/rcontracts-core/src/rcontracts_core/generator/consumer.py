"""Consumer type emitter.

Projects a contract's shape into TypedDict declarations for the calling
side. Each nested node becomes its own TypedDict, emitted before the
declaration that references it; the root is ``<Name>Data``. Field order
follows declaration order.
"""

from __future__ import annotations

import keyword
from dataclasses import dataclass, field
from pathlib import Path

from rcontracts_core.generator.naming import is_attribute_name, to_pascal_case
from rcontracts_core.generator.templates import CONSUMER_TEMPLATE, render
from rcontracts_core.generator.writer import write_artifact
from rcontracts_core.schemas import (
    Contract,
    DerivedField,
    PrimitiveField,
    PrimitiveKind,
    ResourceField,
    ShapeNode,
)

PRIMITIVE_ANNOTATIONS: dict[PrimitiveKind, str] = {
    PrimitiveKind.STRING: "str",
    PrimitiveKind.NUMBER: "float",
    PrimitiveKind.BOOLEAN: "bool",
    PrimitiveKind.DATE: "datetime",
    PrimitiveKind.NULL: "None",
    PrimitiveKind.UNDEFINED: "None",
}

# Names the consumer module imports, defines or annotates with.
RESERVED_NAMES = frozenset(
    {
        "annotations",
        "datetime",
        "Any",
        "TypedDict",
        "str",
        "float",
        "bool",
        "CONTRACT_NAME",
        "CONTRACT_INTENT",
    }
)


@dataclass(frozen=True)
class FieldDecl:
    """One key of a TypedDict declaration."""

    key: str
    annotation: str
    suffix: str = ""


@dataclass
class TypedDictDecl:
    """One TypedDict declaration."""

    name: str
    fields: list[FieldDecl] = field(default_factory=list)

    @property
    def functional(self) -> bool:
        """Return True if any key requires the functional TypedDict syntax."""
        return any(not is_attribute_name(f.key) for f in self.fields)


class _Collector:
    def __init__(self) -> None:
        self.declarations: list[TypedDictDecl] = []
        self.used_names: set[str] = set(RESERVED_NAMES)

    def unique(self, candidate: str) -> str:
        name = candidate
        suffix = 2
        while name in self.used_names or keyword.iskeyword(name):
            name = f"{candidate}{suffix}"
            suffix += 1
        self.used_names.add(name)
        return name

    def visit(self, node: ShapeNode, name: str, prefix: str) -> None:
        decl = TypedDictDecl(name=name)
        for key, leaf in node.fields.items():
            if isinstance(leaf, ShapeNode):
                child_prefix = prefix + to_pascal_case(key)
                child_name = self.unique(child_prefix)
                self.visit(leaf, child_name, child_prefix)
                decl.fields.append(FieldDecl(key=key, annotation=child_name))
            else:
                annotation, comment = _leaf_annotation(leaf)
                suffix = f"  # {comment}" if comment else ""
                decl.fields.append(FieldDecl(key=key, annotation=annotation, suffix=suffix))
        self.declarations.append(decl)


def _leaf_annotation(leaf: PrimitiveField | ResourceField | DerivedField) -> tuple[str, str]:
    if isinstance(leaf, PrimitiveField):
        primitive = leaf.primitive
        if primitive is None:
            return "Any", leaf.type_name
        return PRIMITIVE_ANNOTATIONS[primitive], ""
    if isinstance(leaf, ResourceField):
        return "str", leaf.type_spec
    layer = leaf.preferred_layer
    layer_name = getattr(layer, "value", layer)
    return "Any", f"derived ({layer_name})" if layer_name else "derived"


def build_declarations(contract: Contract) -> list[TypedDictDecl]:
    """Return TypedDict declarations for a contract, children first.

    Args:
        contract: Contract whose shape is projected.

    Returns:
        Declarations in emission order; the root declaration is last.
    """
    collector = _Collector()
    root_name = collector.unique(f"{contract.name}Data")
    collector.visit(contract.shape, root_name, contract.name)
    return collector.declarations


def render_consumer_types(contract: Contract) -> str:
    """Render the consumer type module for a contract."""
    declarations = build_declarations(contract)
    annotations = {f.annotation for decl in declarations for f in decl.fields}

    typing_imports = ["TypedDict"]
    if "Any" in annotations:
        typing_imports.insert(0, "Any")

    return render(
        CONSUMER_TEMPLATE,
        name=contract.name,
        intent=contract.intent,
        declarations=declarations,
        typing_imports=typing_imports,
        uses_datetime="datetime" in annotations,
    )


def generate_consumer_types(contract: Contract, output_path: Path) -> bool:
    """Write the consumer type module for a contract.

    Args:
        contract: Contract to project.
        output_path: Destination ``.py`` file.

    Returns:
        True if the file content changed.

    Raises:
        GenerationError: If the file cannot be written.
    """
    return write_artifact(output_path, render_consumer_types(contract))
