"""GraphQL SDL parser using graphql-core.

Parses schema definition language text and produces an IRSchema.
"""

import logging

from graphql import (
    EnumTypeDefinitionNode,
    EnumTypeExtensionNode,
    ExecutableDefinitionNode,
    GraphQLSyntaxError,
    InputObjectTypeDefinitionNode,
    InputObjectTypeExtensionNode,
    InterfaceTypeDefinitionNode,
    ListTypeNode,
    NamedTypeNode,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    OperationType,
    ScalarTypeDefinitionNode,
    SchemaDefinitionNode,
    TypeNode,
    TypeSystemDefinitionNode,
    TypeSystemExtensionNode,
    UnionTypeDefinitionNode,
    parse,
)

from .errors import ParseError
from .ir import IRField, IRSchema, IRType, TypeRef
from .scalars import BUILTIN_SCALARS, ScalarMap

logger = logging.getLogger(__name__)


class SchemaParser:
    """Parses SDL text into IR.

    Example:
        parser = SchemaParser(ScalarMap.from_argument("ID=Guid"))
        ir = parser.parse("type User { id: ID! name: String }")
        ir.types["User"].fields[0].native_type_name  # "Guid"
    """

    def __init__(self, scalar_map: ScalarMap | None = None):
        self.scalar_map = scalar_map or ScalarMap()
        self.ir = IRSchema()
        self._scalar_names: set[str] = set()
        self._enum_names: set[str] = set()
        self._composite_names: set[str] = set()
        self._root_names: dict[OperationType, str] = {}

    def parse(self, sdl: str) -> IRSchema:
        """Parse SDL text and return the complete IR.

        Raises:
            ParseError: If the text is not valid GraphQL SDL
        """
        try:
            document = parse(sdl, no_location=True)
        except GraphQLSyntaxError as e:
            raise ParseError(f"Invalid GraphQL SDL: {e.message}") from e
        self._check_type_system(document.definitions)

        # Declarations first so fields can reference types defined later
        self._collect_declarations(document.definitions)
        self._process_definitions(document.definitions)
        self._resolve_roots()

        logger.debug(
            "Compiled SDL: %d types, %d inputs, %d enums",
            len(self.ir.types), len(self.ir.inputs), len(self.ir.enums),
        )
        return self.ir

    @staticmethod
    def _check_type_system(definitions):
        for definition in definitions:
            if isinstance(definition, ExecutableDefinitionNode):
                raise ParseError(
                    "Invalid GraphQL SDL: found an executable definition "
                    f"({definition.kind}), expected type system definitions only"
                )
        if not any(
            isinstance(d, (TypeSystemDefinitionNode, TypeSystemExtensionNode))
            for d in definitions
        ):
            raise ParseError("Invalid GraphQL SDL: no type system definitions found")

    def _collect_declarations(self, definitions):
        for definition in definitions:
            if isinstance(definition, ScalarTypeDefinitionNode):
                self._scalar_names.add(definition.name.value)
            elif isinstance(definition, (EnumTypeDefinitionNode, EnumTypeExtensionNode)):
                self._enum_names.add(definition.name.value)
            elif isinstance(
                definition,
                (
                    ObjectTypeDefinitionNode,
                    ObjectTypeExtensionNode,
                    InputObjectTypeDefinitionNode,
                    InputObjectTypeExtensionNode,
                    InterfaceTypeDefinitionNode,
                    UnionTypeDefinitionNode,
                ),
            ):
                self._composite_names.add(definition.name.value)
            elif isinstance(definition, SchemaDefinitionNode):
                for op_type in definition.operation_types:
                    self._root_names[op_type.operation] = op_type.type.name.value

    def _process_definitions(self, definitions):
        """Process GraphQL AST definitions and populate IR."""
        for definition in definitions:
            if isinstance(definition, ScalarTypeDefinitionNode):
                self._process_scalar(definition)
            elif isinstance(definition, (EnumTypeDefinitionNode, EnumTypeExtensionNode)):
                self._process_enum(definition)
            elif isinstance(definition, (ObjectTypeDefinitionNode, ObjectTypeExtensionNode)):
                self._merge_type(self.ir.types, definition, is_input=False)
            elif isinstance(
                definition, (InputObjectTypeDefinitionNode, InputObjectTypeExtensionNode)
            ):
                self._merge_type(self.ir.inputs, definition, is_input=True)

    def _process_scalar(self, node: ScalarTypeDefinitionNode):
        name = node.name.value
        if name not in BUILTIN_SCALARS and name not in self.ir.scalars:
            self.ir.scalars.append(name)

    def _process_enum(self, node: EnumTypeDefinitionNode | EnumTypeExtensionNode):
        values = self.ir.enums.setdefault(node.name.value, [])
        for value in node.values or ():
            if value.name.value not in values:
                values.append(value.name.value)

    def _merge_type(self, collection: dict[str, IRType], node, is_input: bool):
        """Add a type definition, or merge an extension into an existing one.

        Fields already present on the type are kept as first declared.
        """
        name = node.name.value
        ir_type = collection.get(name)
        if ir_type is None:
            ir_type = IRType(name=name, is_input=is_input)
            collection[name] = ir_type

        existing_names = {f.name for f in ir_type.fields}
        for field_node in node.fields or ():
            field_name = field_node.name.value
            if field_name in existing_names:
                continue
            ir_type.fields.append(self._make_field(name, field_name, field_node.type))
            existing_names.add(field_name)

    def _make_field(self, owner: str, name: str, type_node: TypeNode) -> IRField:
        ref = self._get_type_ref(type_node)
        base = ref.name

        if base in self._enum_names:
            return IRField.from_type_ref(name, ref, base, is_enum=True)

        # A declared type or input wins over a scalar override of the same name
        if base in self._composite_names:
            return IRField.from_type_ref(name, ref, base)

        if base in self._scalar_names or self.scalar_map.is_known(base):
            return IRField.from_type_ref(
                name, ref, self.scalar_map.resolve(base), is_scalar=True
            )

        logger.warning("Field %s.%s references undefined type %s", owner, name, base)
        return IRField.from_type_ref(name, ref, base)

    @classmethod
    def _get_type_ref(cls, type_node: TypeNode) -> TypeRef:
        """Reduce a type node like ``[String!]!`` to its base name and wrappers.

        Nested lists collapse into a single list flag; the element
        nullability is taken from the outermost element.
        """
        is_non_null = False

        # NonNull wrapper means required
        if isinstance(type_node, NonNullTypeNode):
            is_non_null = True
            type_node = type_node.type

        if isinstance(type_node, ListTypeNode):
            item = cls._get_type_ref(type_node.type)
            return TypeRef(
                item.name,
                is_list=True,
                is_non_null=is_non_null,
                is_item_non_null=item.is_non_null,
            )

        # After unwrapping, we should have a NamedTypeNode
        assert isinstance(type_node, NamedTypeNode), f"Expected NamedTypeNode, got {type(type_node)}"
        return TypeRef(type_node.name.value, is_non_null=is_non_null)

    def _resolve_roots(self):
        """Find the Query and Mutation types, by schema block or by name."""
        if self._root_names:
            query_name = self._root_names.get(OperationType.QUERY)
            mutation_name = self._root_names.get(OperationType.MUTATION)
        else:
            query_name, mutation_name = "Query", "Mutation"

        self.ir.query = self._find_root(query_name, required=bool(self._root_names))
        self.ir.mutation = self._find_root(mutation_name, required=bool(self._root_names))

    def _find_root(self, name: str | None, required: bool) -> IRType | None:
        if name is None:
            return None
        root = self.ir.types.get(name)
        if root is None and required:
            logger.warning("Schema block names root type %s which is not defined", name)
        return root


def parse_sdl(sdl: str, scalar_map: ScalarMap | None = None) -> IRSchema:
    """Convenience wrapper: parse SDL text with a fresh parser."""
    return SchemaParser(scalar_map).parse(sdl)
