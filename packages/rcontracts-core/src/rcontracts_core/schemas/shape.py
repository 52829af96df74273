"""Shape tree models for reactive contracts.

A shape is a recursive mapping from field name to a leaf. Leaves are a
discriminated union on ``kind``:

- PrimitiveField: a primitive type name ("string", "number", "date", ...)
- ResourceField: a URL-typed field, "Resource" or "Resource<options>"
- ShapeNode: a nested shape
- DerivedField: a value computed from other fields

Every leaf is addressed by a dotted path ("activity.lastActive"). Paths
are the unit used by derived-field dependencies and reactivity rules.

Only the structure is enforced here. Primitive names, the Resource
grammar, and derived-field options are checked by the contract validator
so that every defect is reported in one pass.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import Field

from rcontracts_core.errors import ContractDefinitionError
from rcontracts_core.schemas.base import ContractModel

RESOURCE_TOKEN = "Resource"
RESOURCE_PATTERN = re.compile(r"^Resource<(.+)>$")


class PrimitiveKind(str, Enum):
    """Primitive type names accepted in a shape."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    NULL = "null"
    UNDEFINED = "undefined"


PRIMITIVE_TYPES: frozenset[str] = frozenset(kind.value for kind in PrimitiveKind)


class ComputeLayer(str, Enum):
    """Layer where a derived field prefers to be computed."""

    CONSUMER = "consumer"
    EDGE = "edge"
    ORIGIN = "origin"


COMPUTE_LAYERS: frozenset[str] = frozenset(layer.value for layer in ComputeLayer)


class PrimitiveField(ContractModel):
    """Leaf holding a primitive type name.

    The name is kept verbatim; the validator rejects names outside
    PRIMITIVE_TYPES.

    Attributes:
        type_name: Declared primitive name, e.g. "string".
    """

    kind: Literal["primitive"] = "primitive"
    type_name: str = Field(..., description="Declared primitive type name")

    @property
    def primitive(self) -> PrimitiveKind | None:
        """Return the PrimitiveKind, or None if the name is not a known primitive."""
        if self.type_name in PRIMITIVE_TYPES:
            return PrimitiveKind(self.type_name)
        return None


class ResourceField(ContractModel):
    """Leaf holding a URL-typed resource with optional transform options.

    Attributes:
        type_spec: Declared text, "Resource" or "Resource<options>".

    Example:
        >>> ResourceField(type_spec="Resource<optimized:200x200>").options
        'optimized:200x200'
    """

    kind: Literal["resource"] = "resource"
    type_spec: str = Field(..., description="Declared resource type text")

    @property
    def is_well_formed(self) -> bool:
        """Return True if type_spec matches the Resource grammar."""
        if self.type_spec == RESOURCE_TOKEN:
            return True
        return RESOURCE_PATTERN.fullmatch(self.type_spec) is not None

    @property
    def options(self) -> str | None:
        """Return the opaque options string, if any."""
        match = RESOURCE_PATTERN.fullmatch(self.type_spec)
        return match.group(1) if match else None


class DerivedField(ContractModel):
    """Leaf computed from other fields instead of supplied by the provider.

    Values are stored as declared. The validator requires a callable
    compute function, a list of string dependency paths that resolve
    elsewhere in the shape, and a preferred layer from ComputeLayer.

    Attributes:
        compute: Function of a context mapping returning the derived value.
        dependencies: Dotted paths the computation reads.
        preferred_layer: Where to compute the value (consumer, edge, origin).
    """

    kind: Literal["derived"] = "derived"
    compute: Any = Field(default=None, description="Function computing the value")
    dependencies: Any = Field(default=None, description="Dotted paths read by compute")
    preferred_layer: Any = Field(default=None, description="consumer, edge or origin")


class ShapeNode(ContractModel):
    """A (possibly nested) shape: ordered mapping of field name to leaf.

    Declaration order is preserved and drives generated output order.

    Attributes:
        fields: Field name to leaf mapping.

    Example:
        >>> node = ShapeNode.from_mapping({"user": {"id": "string"}})
        >>> node.field_paths()
        ['user', 'user.id']
    """

    kind: Literal["shape"] = "shape"
    fields: dict[str, ShapeLeaf] = Field(default_factory=dict, description="Field leaves")

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any], path: str = "") -> ShapeNode:
        """Build a ShapeNode from a declarative mapping.

        Strings starting with "Resource" become ResourceField, other strings
        PrimitiveField, mappings recurse, and model instances are kept.

        Args:
            raw: Declarative shape mapping.
            path: Dotted path of this node (empty for the root).

        Returns:
            The constructed ShapeNode.

        Raises:
            ContractDefinitionError: If a key is not a string or a value is
                not a type string, mapping, or shape model.
        """
        fields: dict[str, ShapeLeaf] = {}
        for key, value in raw.items():
            if not isinstance(key, str):
                raise ContractDefinitionError(
                    f"Invalid field name at {path or 'root'}: field names must be strings",
                    field_path=path or None,
                    internal_details=f"key={key!r}",
                )
            field_path = f"{path}.{key}" if path else key
            fields[key] = _build_leaf(value, field_path)
        return cls(fields=fields)

    def is_empty(self) -> bool:
        """Return True if the node declares no fields."""
        return not self.fields

    def iter_fields(self, prefix: str = "") -> Iterator[tuple[str, ShapeLeaf]]:
        """Yield (dotted path, leaf) pairs depth-first in declaration order.

        Nested nodes are yielded before their children.
        """
        for key, leaf in self.fields.items():
            path = f"{prefix}.{key}" if prefix else key
            yield path, leaf
            if isinstance(leaf, ShapeNode):
                yield from leaf.iter_fields(path)

    def field_paths(self) -> list[str]:
        """Return every dotted path in the shape, depth-first."""
        return [path for path, _ in self.iter_fields()]

    def derived_fields(self) -> list[tuple[str, DerivedField]]:
        """Return (path, field) for every DerivedField at any depth."""
        return [(path, leaf) for path, leaf in self.iter_fields() if isinstance(leaf, DerivedField)]


ShapeLeaf = Annotated[
    Union[PrimitiveField, ResourceField, ShapeNode, DerivedField],
    Field(discriminator="kind"),
]

ShapeNode.model_rebuild()


def _build_leaf(value: Any, path: str) -> ShapeLeaf:
    if isinstance(value, (PrimitiveField, ResourceField, ShapeNode, DerivedField)):
        return value
    if isinstance(value, str):
        if value.startswith(RESOURCE_TOKEN):
            return ResourceField(type_spec=value)
        return PrimitiveField(type_name=value)
    if isinstance(value, Mapping):
        return ShapeNode.from_mapping(value, path)
    raise ContractDefinitionError(
        f"Invalid type at {path}: must be a type string, a nested shape, or a derived field",
        field_path=path,
        internal_details=f"value={value!r}",
    )
