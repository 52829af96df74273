"""Provider stub emitter.

Emits ``resolve_<name>(params)`` returning the contract's field tree with
a ``# provide: <type>`` marker on every value the origin must supply.
Derived fields are never provided by the origin, so they are dropped, and
nested nodes left empty by that are dropped with them.
"""

from __future__ import annotations

import json
from pathlib import Path

from rcontracts_core.generator.consumer import PRIMITIVE_ANNOTATIONS
from rcontracts_core.generator.naming import to_snake_case
from rcontracts_core.generator.templates import PROVIDER_TEMPLATE, render
from rcontracts_core.generator.writer import write_artifact
from rcontracts_core.schemas import (
    Contract,
    DerivedField,
    PrimitiveField,
    ResourceField,
    ShapeNode,
)

INDENT = "    "


def prune_derived(node: ShapeNode) -> ShapeNode:
    """Return a copy of node without derived leaves or emptied nested nodes.

    Nodes that were empty as declared are kept.

    Example:
        >>> shape = ShapeNode.from_mapping({"a": {"b": derive(fn)}, "c": "string"})
        >>> prune_derived(shape).field_paths()
        ['c']
    """
    fields = {}
    for key, leaf in node.fields.items():
        if isinstance(leaf, DerivedField):
            continue
        if isinstance(leaf, ShapeNode):
            pruned = prune_derived(leaf)
            if pruned.is_empty() and not leaf.is_empty():
                continue
            fields[key] = pruned
        else:
            fields[key] = leaf
    return ShapeNode(fields=fields)


def _provide_marker(leaf: PrimitiveField | ResourceField) -> str:
    if isinstance(leaf, ResourceField):
        return f"str ({leaf.type_spec})"
    primitive = leaf.primitive
    return PRIMITIVE_ANNOTATIONS[primitive] if primitive is not None else leaf.type_name


def _body_lines(node: ShapeNode, depth: int) -> list[str]:
    lines: list[str] = []
    pad = INDENT * depth
    for key, leaf in node.fields.items():
        literal = json.dumps(key)
        if isinstance(leaf, ShapeNode):
            if leaf.is_empty():
                lines.append(f"{pad}{literal}: {{}},")
                continue
            lines.append(f"{pad}{literal}: {{")
            lines.extend(_body_lines(leaf, depth + 1))
            lines.append(f"{pad}}},")
        elif isinstance(leaf, (PrimitiveField, ResourceField)):
            lines.append(f"{pad}{literal}: None,  # provide: {_provide_marker(leaf)}")
    return lines


def render_provider_stub(contract: Contract) -> str:
    """Render the provider stub module for a contract."""
    shape = prune_derived(contract.shape)
    if shape.is_empty():
        body = ["return {}"]
    else:
        body = ["return {", *_body_lines(shape, 1), "}"]

    return render(
        PROVIDER_TEMPLATE,
        name=contract.name,
        function_name=f"resolve_{to_snake_case(contract.name)}",
        body=body,
    )


def generate_provider_stub(contract: Contract, output_path: Path) -> bool:
    """Write the provider stub module for a contract.

    Args:
        contract: Contract to stub.
        output_path: Destination ``.py`` file.

    Returns:
        True if the file content changed.

    Raises:
        GenerationError: If the file cannot be written.
    """
    return write_artifact(output_path, render_provider_stub(contract))
