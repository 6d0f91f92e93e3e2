"""Unit tests for the introspection parser."""

import json

import pytest
from graphql import build_schema, introspection_from_schema

from gql_netgen.core.errors import FormatError
from gql_netgen.core.introspection import (
    IntrospectionParser,
    IntrospectionTypeRef,
    parse_introspection,
)
from gql_netgen.core.ir import TypeRef
from gql_netgen.core.parser import parse_sdl
from gql_netgen.core.scalars import ScalarMap


# =============================================================================
# Payload helpers
# =============================================================================


def named(kind, name):
    return {"kind": kind, "name": name, "ofType": None}


def non_null(type_ref):
    return {"kind": "NON_NULL", "name": None, "ofType": type_ref}


def list_of(type_ref):
    return {"kind": "LIST", "name": None, "ofType": type_ref}


def field(name, type_ref):
    return {"name": name, "args": [], "type": type_ref, "isDeprecated": False}


def response(types, query="Query", mutation=None):
    return {
        "data": {
            "__schema": {
                "queryType": {"name": query} if query else None,
                "mutationType": {"name": mutation} if mutation else None,
                "subscriptionType": None,
                "types": types,
                "directives": [],
            }
        }
    }


@pytest.fixture
def payload():
    return response(
        [
            {
                "kind": "OBJECT",
                "name": "Query",
                "fields": [field("user", named("OBJECT", "User"))],
            },
            {
                "kind": "OBJECT",
                "name": "User",
                "fields": [
                    field("id", non_null(named("SCALAR", "ID"))),
                    field("age", named("SCALAR", "Int")),
                    field("tags", non_null(list_of(non_null(named("SCALAR", "String"))))),
                    field("role", named("ENUM", "Role")),
                    field("created", named("SCALAR", "Date")),
                ],
                "inputFields": None,
                "enumValues": None,
            },
            {
                "kind": "INPUT_OBJECT",
                "name": "UserInput",
                "fields": None,
                "inputFields": [
                    {"name": "name", "type": non_null(named("SCALAR", "String")), "defaultValue": None},
                ],
            },
            {
                "kind": "ENUM",
                "name": "Role",
                "enumValues": [{"name": "ADMIN"}, {"name": "MEMBER"}],
            },
            {"kind": "SCALAR", "name": "Date"},
            {"kind": "SCALAR", "name": "String"},
            {"kind": "INTERFACE", "name": "Node", "fields": [field("id", named("SCALAR", "ID"))]},
            {"kind": "OBJECT", "name": "__Type", "fields": [field("name", named("SCALAR", "String"))]},
        ]
    )


class TestIntrospectionParser:
    """Tests for IntrospectionParser on a hand-built payload."""

    def test_collections(self, payload):
        ir = parse_introspection(payload)
        assert list(ir.types) == ["Query", "User"]
        assert list(ir.inputs) == ["UserInput"]
        assert ir.enums == {"Role": ["ADMIN", "MEMBER"]}
        assert ir.scalars == ["Date"]

    def test_meta_types_and_interfaces_skipped(self, payload):
        ir = parse_introspection(payload)
        assert "__Type" not in ir.types
        assert "Node" not in ir.types

    def test_roots(self, payload):
        ir = parse_introspection(payload)
        assert ir.query is ir.types["Query"]
        assert ir.mutation is None

    def test_non_null_list_of_non_null(self, payload):
        tags = parse_introspection(payload).types["User"].get_field("tags")
        assert tags.native_type_name == "string"
        assert tags.is_scalar
        assert tags.is_array
        assert tags.is_non_nullable
        assert tags.is_item_non_nullable

    def test_nullable_scalar(self, payload):
        age = parse_introspection(payload).types["User"].get_field("age")
        assert (age.native_type_name, age.is_array, age.is_non_nullable) == ("int", False, False)

    def test_enum_and_object_classification(self, payload):
        ir = parse_introspection(payload)
        role = ir.types["User"].get_field("role")
        assert role.is_enum and not role.is_scalar
        user = ir.types["Query"].get_field("user")
        assert user.is_object

    def test_input_fields(self, payload):
        name = parse_introspection(payload).inputs["UserInput"].fields[0]
        assert name.native_name == "Name"
        assert name.is_non_nullable

    def test_scalar_override(self, payload):
        ir = IntrospectionParser(ScalarMap.from_argument("ID=Guid,Date=DateTime")).parse(payload)
        user = ir.types["User"]
        assert user.get_field("id").native_type_name == "Guid"
        assert user.get_field("created").native_type_name == "DateTime"

    def test_accepts_json_text(self, payload):
        ir = parse_introspection(json.dumps(payload))
        assert "User" in ir.types

    def test_accepts_bytes(self, payload):
        ir = parse_introspection(json.dumps(payload).encode())
        assert "User" in ir.types

    @pytest.mark.parametrize(
        "type_ref,expected",
        [
            (named("SCALAR", "String"), TypeRef("String")),
            (non_null(named("SCALAR", "String")), TypeRef("String", is_non_null=True)),
            (list_of(named("SCALAR", "String")), TypeRef("String", is_list=True)),
            (
                list_of(non_null(named("SCALAR", "String"))),
                TypeRef("String", is_list=True, is_item_non_null=True),
            ),
            (
                non_null(list_of(named("SCALAR", "String"))),
                TypeRef("String", is_list=True, is_non_null=True),
            ),
            (list_of(list_of(named("SCALAR", "String"))), TypeRef("String", is_list=True)),
        ],
    )
    def test_type_ref_unwrapping(self, type_ref, expected):
        ref, leaf_kind = IntrospectionParser._get_type_ref(
            IntrospectionTypeRef.model_validate(type_ref)
        )
        assert ref == expected
        assert leaf_kind == "SCALAR"


class TestIntrospectionFormatErrors:
    """Payloads that are not introspection responses."""

    def test_invalid_json(self):
        with pytest.raises(FormatError, match="not valid JSON"):
            parse_introspection("type User { id: ID }")

    def test_missing_schema(self):
        with pytest.raises(FormatError):
            parse_introspection({"data": {}})

    def test_missing_data(self):
        with pytest.raises(FormatError):
            parse_introspection({"__schema": {"types": []}})

    def test_types_not_a_list(self):
        with pytest.raises(FormatError):
            parse_introspection({"data": {"__schema": {"types": "nope"}}})

    def test_error_response(self):
        with pytest.raises(FormatError, match="Not authorized"):
            parse_introspection({"errors": [{"message": "Not authorized"}], "data": None})

    def test_wrapper_without_of_type(self):
        bad = response(
            [{"kind": "OBJECT", "name": "Query", "fields": [field("x", non_null(None))]}]
        )
        with pytest.raises(FormatError, match="missing ofType"):
            parse_introspection(bad)


class TestFormatIndependence:
    """SDL and the introspection result of the same schema give the same IR."""

    @staticmethod
    def field_signature(f):
        return (
            f.name,
            f.native_name,
            f.native_type_name,
            f.is_scalar,
            f.is_enum,
            f.is_array,
            f.is_non_nullable,
            f.is_item_non_nullable,
        )

    @pytest.fixture
    def both(self, library_sdl):
        scalar_map = ScalarMap.from_argument("ID=Guid,Date=DateTime")
        from_sdl = parse_sdl(library_sdl, scalar_map)
        introspection = {"data": introspection_from_schema(build_schema(library_sdl))}
        from_introspection = parse_introspection(json.dumps(introspection), scalar_map)
        return from_sdl, from_introspection

    def test_same_type_names(self, both):
        from_sdl, from_introspection = both
        assert set(from_sdl.types) == set(from_introspection.types)
        assert set(from_sdl.inputs) == set(from_introspection.inputs)

    def test_same_fields(self, both):
        from_sdl, from_introspection = both
        for name, sdl_type in from_sdl.get_all_types().items():
            other = from_introspection.get_type_by_name(name)
            assert other is not None, name
            assert other.is_input == sdl_type.is_input
            assert [self.field_signature(f) for f in sdl_type.fields] == [
                self.field_signature(f) for f in other.fields
            ], name

    def test_same_enums_scalars_and_roots(self, both):
        from_sdl, from_introspection = both
        assert from_sdl.enums == from_introspection.enums
        assert from_sdl.scalars == from_introspection.scalars
        assert from_sdl.query.name == from_introspection.query.name
        assert from_sdl.mutation.name == from_introspection.mutation.name

    def test_override_named_after_object_type(self):
        sdl = "type Money { amount: Float } type Query { price: Money }"
        scalar_map = ScalarMap.from_argument("Money=decimal")
        from_sdl = parse_sdl(sdl, scalar_map)
        introspection = {"data": introspection_from_schema(build_schema(sdl))}
        from_introspection = parse_introspection(introspection, scalar_map)

        sdl_price = from_sdl.types["Query"].get_field("price")
        introspection_price = from_introspection.types["Query"].get_field("price")
        assert self.field_signature(sdl_price) == self.field_signature(introspection_price)
        assert sdl_price.is_object
        assert sdl_price.native_type_name == "Money"
