"""End-to-end generation: load, compile, emit, write."""

import logging
import os
from dataclasses import dataclass

from .errors import ConfigurationError
from .generator import OUTPUT_FILE, CodeGenerator
from .introspection import IntrospectionParser
from .ir import IRSchema
from .parser import SchemaParser
from .scalars import ScalarMap
from .source import SchemaSource
from .templates import TemplateRenderer

logger = logging.getLogger(__name__)


def validate_names(namespace: str, client_class_name: str):
    """Check the namespace and client class name are usable C# identifiers.

    Raises:
        ConfigurationError: If either name is not a (dotted) identifier
    """
    if not namespace or not all(part.isidentifier() for part in namespace.split(".")):
        raise ConfigurationError(f"Invalid namespace: {namespace!r}")
    if not client_class_name.isidentifier():
        raise ConfigurationError(f"Invalid client class name: {client_class_name!r}")


def compile_schema(source: SchemaSource, scalar_map: ScalarMap | None = None) -> IRSchema:
    """Pick the parser matching the source format and build the IR."""
    if source.is_introspection:
        return IntrospectionParser(scalar_map).parse(source.text)
    return SchemaParser(scalar_map).parse(source.text)


@dataclass
class GenerationResult:
    ir: IRSchema
    content: str
    output_path: str


def generate(
    source: SchemaSource,
    output_dir: str,
    *,
    scalar_map: ScalarMap | None = None,
    namespace: str = "Generated",
    client_class_name: str = "GraphQLClient",
    template_dir: str | None = None,
) -> GenerationResult:
    """Compile the schema and write GeneratedTypes.cs into output_dir.

    Nothing is written unless compilation and rendering both succeed. Callers
    check namespace and client_class_name with validate_names first.
    """
    ir = compile_schema(source, scalar_map)

    generator = CodeGenerator(namespace=namespace, client_class_name=client_class_name)
    body = TemplateRenderer(template_dir).emit(ir) if template_dir else None
    content = generator.render_file(ir, body=body)

    os.makedirs(output_dir, exist_ok=True)
    output_path = os.path.join(output_dir, OUTPUT_FILE)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(content)

    logger.debug("Wrote %d characters to %s", len(content), output_path)
    return GenerationResult(ir=ir, content=content, output_path=output_path)
