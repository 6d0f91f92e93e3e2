"""Intermediate Representation (IR) for GraphQL schemas.

This module defines dataclasses that represent GraphQL schema constructs
in a language-agnostic way, suitable for code generation. Both the SDL
parser and the introspection parser produce an IRSchema, so the code
generator never needs to know which input format was used.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TypeRef:
    """A GraphQL type reference reduced to its base name and wrappers.

    ``[String!]!`` becomes ``TypeRef("String", is_list=True,
    is_non_null=True, is_item_non_null=True)``.
    """
    name: str
    is_list: bool = False
    is_non_null: bool = False
    is_item_non_null: bool = False


def native_field_name(name: str) -> str:
    """Upper-case the first letter of a field name, e.g. date_of_birth -> Date_of_birth."""
    return name[:1].upper() + name[1:]


@dataclass
class IRField:
    """Represents a field in a GraphQL object or input type."""
    name: str
    native_type_name: str
    is_scalar: bool = False
    is_non_nullable: bool = False
    is_array: bool = False
    is_enum: bool = False
    is_item_non_nullable: bool = False
    native_name: str = ""

    def __post_init__(self):
        if not self.native_name:
            self.native_name = native_field_name(self.name)

    @classmethod
    def from_type_ref(
        cls,
        name: str,
        ref: TypeRef,
        native_type_name: str,
        *,
        is_scalar: bool = False,
        is_enum: bool = False,
    ) -> "IRField":
        return cls(
            name=name,
            native_type_name=native_type_name,
            is_scalar=is_scalar,
            is_enum=is_enum,
            is_non_nullable=ref.is_non_null,
            is_array=ref.is_list,
            is_item_non_nullable=ref.is_item_non_null,
        )

    @property
    def is_object(self) -> bool:
        """True when the field references another object or input type."""
        return not self.is_scalar and not self.is_enum

    @property
    def native_type(self) -> str:
        """C# type of the property, wrapped in List<> for array fields."""
        if self.is_array:
            return f"List<{self.native_type_name}>"
        return self.native_type_name


@dataclass
class IRType:
    """Represents a GraphQL object type or input type."""
    name: str
    fields: list[IRField] = field(default_factory=list)
    is_input: bool = False

    def get_field(self, name: str) -> IRField | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None


@dataclass
class IRSchema:
    """Complete intermediate representation of a GraphQL schema."""
    types: dict[str, IRType] = field(default_factory=dict)
    inputs: dict[str, IRType] = field(default_factory=dict)
    enums: dict[str, list[str]] = field(default_factory=dict)
    scalars: list[str] = field(default_factory=list)
    query: IRType | None = None
    mutation: IRType | None = None

    def get_type_by_name(self, name: str) -> IRType | None:
        """Look up an object or input type by name."""
        if name in self.types:
            return self.types[name]
        return self.inputs.get(name)

    def get_all_types(self) -> dict[str, IRType]:
        """Return object types followed by input types, in declaration order."""
        result = {}
        result.update(self.types)
        result.update(self.inputs)
        return result
