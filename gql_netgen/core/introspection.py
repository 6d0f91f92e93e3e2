"""GraphQL introspection parser.

Parses the JSON response of an IntrospectionQuery and produces the same
IRSchema the SDL parser does. The response is validated with pydantic
models before any IR is built.

Introspection encodes wrappers as nested kinds rather than SDL's ``!`` and
``[]``: ``[String!]!`` arrives as

    {"kind": "NON_NULL", "ofType":
        {"kind": "LIST", "ofType":
            {"kind": "NON_NULL", "ofType": {"kind": "SCALAR", "name": "String"}}}}
"""

import json
import logging
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import FormatError
from .ir import IRField, IRSchema, IRType, TypeRef
from .scalars import BUILTIN_SCALARS, ScalarMap

logger = logging.getLogger(__name__)

# __TypeKind values
SCALAR = "SCALAR"
OBJECT = "OBJECT"
INTERFACE = "INTERFACE"
UNION = "UNION"
ENUM = "ENUM"
INPUT_OBJECT = "INPUT_OBJECT"
LIST = "LIST"
NON_NULL = "NON_NULL"


class _IntrospectionModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class IntrospectionTypeRef(_IntrospectionModel):
    kind: str
    name: Optional[str] = None
    of_type: Optional["IntrospectionTypeRef"] = Field(default=None, alias="ofType")


IntrospectionTypeRef.model_rebuild()


class IntrospectionField(_IntrospectionModel):
    name: str
    type: IntrospectionTypeRef


class IntrospectionEnumValue(_IntrospectionModel):
    name: str


class IntrospectionNamedRef(_IntrospectionModel):
    name: str


class IntrospectionFullType(_IntrospectionModel):
    kind: str
    name: str
    fields: Optional[list[IntrospectionField]] = None
    input_fields: Optional[list[IntrospectionField]] = Field(default=None, alias="inputFields")
    enum_values: Optional[list[IntrospectionEnumValue]] = Field(default=None, alias="enumValues")


class IntrospectionSchema(_IntrospectionModel):
    query_type: Optional[IntrospectionNamedRef] = Field(default=None, alias="queryType")
    mutation_type: Optional[IntrospectionNamedRef] = Field(default=None, alias="mutationType")
    types: list[IntrospectionFullType]


class IntrospectionData(_IntrospectionModel):
    schema_: IntrospectionSchema = Field(alias="__schema")


class IntrospectionResponse(_IntrospectionModel):
    data: IntrospectionData


class IntrospectionParser:
    """Parses an introspection query response into IR.

    Example:
        parser = IntrospectionParser(ScalarMap())
        ir = parser.parse(response_text)
    """

    def __init__(self, scalar_map: ScalarMap | None = None):
        self.scalar_map = scalar_map or ScalarMap()
        self.ir = IRSchema()

    def parse(self, payload: str | bytes | dict[str, Any]) -> IRSchema:
        """Parse an introspection response (raw JSON or already decoded).

        Raises:
            FormatError: If the payload does not contain data.__schema.types
        """
        response = self._validate(payload)
        schema = response.data.schema_

        for full_type in schema.types:
            self._process_type(full_type)

        if schema.query_type:
            self.ir.query = self.ir.types.get(schema.query_type.name)
        if schema.mutation_type:
            self.ir.mutation = self.ir.types.get(schema.mutation_type.name)

        logger.debug(
            "Compiled introspection: %d types, %d inputs, %d enums",
            len(self.ir.types), len(self.ir.inputs), len(self.ir.enums),
        )
        return self.ir

    @staticmethod
    def _validate(payload: str | bytes | dict[str, Any]) -> IntrospectionResponse:
        if not isinstance(payload, dict):
            try:
                payload = json.loads(payload)
            except ValueError as e:
                raise FormatError(f"Introspection response is not valid JSON: {e}") from e

        if isinstance(payload, dict):
            errors = payload.get("errors")
            if errors and not payload.get("data"):
                messages = "; ".join(
                    e.get("message", str(e)) if isinstance(e, dict) else str(e) for e in errors
                )
                raise FormatError(f"Introspection response contains errors: {messages}")
        try:
            return IntrospectionResponse.model_validate(payload)
        except ValidationError as e:
            raise FormatError(
                f"Not an introspection response (expected data.__schema.types): {e}"
            ) from e

    def _process_type(self, full_type: IntrospectionFullType):
        name = full_type.name
        # Introspection meta types (__Schema, __Type, ...)
        if name.startswith("__"):
            return

        if full_type.kind == OBJECT:
            self.ir.types[name] = IRType(
                name=name, fields=self._process_fields(full_type.fields or [])
            )
        elif full_type.kind == INPUT_OBJECT:
            self.ir.inputs[name] = IRType(
                name=name,
                fields=self._process_fields(full_type.input_fields or []),
                is_input=True,
            )
        elif full_type.kind == ENUM:
            self.ir.enums[name] = [v.name for v in full_type.enum_values or []]
        elif full_type.kind == SCALAR:
            if name not in BUILTIN_SCALARS:
                self.ir.scalars.append(name)

    def _process_fields(self, fields: list[IntrospectionField]) -> list[IRField]:
        result = []
        for f in fields:
            ref, leaf_kind = self._get_type_ref(f.type)
            if leaf_kind == ENUM:
                result.append(IRField.from_type_ref(f.name, ref, ref.name, is_enum=True))
            elif leaf_kind == SCALAR:
                result.append(
                    IRField.from_type_ref(
                        f.name, ref, self.scalar_map.resolve(ref.name), is_scalar=True
                    )
                )
            else:
                result.append(IRField.from_type_ref(f.name, ref, ref.name))
        return result

    @classmethod
    def _get_type_ref(cls, type_ref: IntrospectionTypeRef) -> tuple[TypeRef, str]:
        """Unwrap NON_NULL / LIST kinds into a TypeRef plus the leaf's kind.

        Mirrors the SDL unwrapping: nested lists collapse into one list flag
        and the element nullability comes from the outermost element.
        """
        is_non_null = False

        if type_ref.kind == NON_NULL:
            is_non_null = True
            type_ref = cls._of_type(type_ref)

        if type_ref.kind == LIST:
            item, leaf_kind = cls._get_type_ref(cls._of_type(type_ref))
            return (
                TypeRef(
                    item.name,
                    is_list=True,
                    is_non_null=is_non_null,
                    is_item_non_null=item.is_non_null,
                ),
                leaf_kind,
            )

        if type_ref.kind == NON_NULL or not type_ref.name:
            raise FormatError(f"Malformed type reference of kind {type_ref.kind}")
        return TypeRef(type_ref.name, is_non_null=is_non_null), type_ref.kind

    @staticmethod
    def _of_type(type_ref: IntrospectionTypeRef) -> IntrospectionTypeRef:
        if type_ref.of_type is None:
            raise FormatError(f"Type reference of kind {type_ref.kind} is missing ofType")
        return type_ref.of_type


def parse_introspection(
    payload: str | bytes | dict[str, Any], scalar_map: ScalarMap | None = None
) -> IRSchema:
    """Convenience wrapper: parse an introspection response with a fresh parser."""
    return IntrospectionParser(scalar_map).parse(payload)
