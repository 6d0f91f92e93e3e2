"""Core modules for GraphQL to C# code generation."""

from .auth import Auth, HeaderAuth, NoAuth
from .errors import (
    AcquisitionError,
    ConfigurationError,
    FormatError,
    GenerationError,
    ParseError,
)
from .generator import CodeGenerator
from .introspection import IntrospectionParser, parse_introspection
from .ir import IRField, IRSchema, IRType, TypeRef
from .parser import SchemaParser, parse_sdl
from .pipeline import compile_schema, generate
from .scalars import BUILTIN_SCALARS, ScalarMap, split_multi_value_argument
from .source import SchemaFetcher, SchemaSource, load_schema_source
from .templates import TemplateRenderer

__all__ = [
    # Auth
    "Auth",
    "HeaderAuth",
    "NoAuth",
    # Errors
    "GenerationError",
    "AcquisitionError",
    "ParseError",
    "FormatError",
    "ConfigurationError",
    # Scalars
    "BUILTIN_SCALARS",
    "ScalarMap",
    "split_multi_value_argument",
    # IR types
    "IRField",
    "IRSchema",
    "IRType",
    "TypeRef",
    # Parsers
    "SchemaParser",
    "parse_sdl",
    "IntrospectionParser",
    "parse_introspection",
    # Generation
    "CodeGenerator",
    "TemplateRenderer",
    "compile_schema",
    "generate",
    # Sources
    "SchemaFetcher",
    "SchemaSource",
    "load_schema_source",
]
