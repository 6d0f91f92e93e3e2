"""C# code generator for GraphQL IR.

Builds the output text directly from the IR: for every object type and
input type, a plain data class plus a GraphQL.NET binding class:

    public class User
    {
    	public string Id { get; set; }
    	public int? Age { get; set; }
    }
    public class UserImpl : ObjectGraphType<User>
    {
    	public UserImpl()
    	{
    		Name = nameof(User);

    		Field("id", x => x.Id, nullable: false);
    		Field("age", x => x.Age, nullable: true);
    	}
    }

The same body can be rendered from a Jinja2 template with
gql_netgen.core.templates.TemplateRenderer.
"""

from .ir import IRField, IRSchema, IRType

NEWLINE = "\n"
INDENT = "\t"
NULLABLE_SUFFIX = "?"
OUTPUT_FILE = "GeneratedTypes.cs"

USINGS = [
    "System",
    "System.Collections.Generic",
    "GraphQL.Types",
]


def property_type(field: IRField) -> str:
    """C# type of the data class property for a field.

    Only nullable, non-list scalars get the ``?`` suffix; object and list
    types carry their own nullability.
    """
    field_type = field.native_type
    if (
        field.is_scalar
        and not field.is_non_nullable
        and not field.is_array
        and not field_type.endswith(NULLABLE_SUFFIX)
    ):
        field_type = f"{field_type}{NULLABLE_SUFFIX}"
    return field_type


def type_hint(field: IRField) -> str:
    """Capitalized native type name used in ``typeof(...)`` hints, e.g. string -> String."""
    clean = field.native_type_name.replace(NULLABLE_SUFFIX, "")
    return clean[:1].upper() + clean[1:]


def graph_class(ir_type: IRType) -> str:
    return "InputObjectGraphType" if ir_type.is_input else "ObjectGraphType"


def binding_statement(field: IRField, ir_type: IRType) -> str:
    """The ``Field(...)`` registration for one field of a binding class.

    Input types always name the graph type explicitly. Output types let
    GraphQL.NET infer scalars and name the type for everything else.
    """
    nullable = "false" if field.is_non_nullable else "true"
    prefix = f'Field("{field.name}", x => x.{field.native_name}, nullable: {nullable}'
    if ir_type.is_input:
        return f"{prefix}, type: typeof({type_hint(field)}GraphType));"
    if field.is_scalar:
        return f"{prefix});"
    return f"{prefix}, type: typeof({type_hint(field)}));"


class CodeGenerator:
    """Generates C# classes and GraphQL.NET bindings from GraphQL IR.

    Example:
        generator = CodeGenerator(namespace="MyApp.Api")
        body = generator.emit(ir)          # classes only
        text = generator.render_file(ir)   # usings, namespace, enums, schema
    """

    def __init__(self, namespace: str = "Generated", client_class_name: str = "GraphQLClient"):
        self.namespace = namespace
        self.client_class_name = client_class_name

    def emit(self, ir: IRSchema) -> str:
        """Emit a data class and a binding class for every type, then every input."""
        lines: list[str] = []
        for ir_type in ir.get_all_types().values():
            lines.extend(self._emit_data_class(ir_type))
            lines.extend(self._emit_binding_class(ir_type))
        return "".join(line + NEWLINE for line in lines)

    def _emit_data_class(self, ir_type: IRType) -> list[str]:
        lines = [f"public class {ir_type.name}", "{"]
        for field in ir_type.fields:
            lines.append(
                f"{INDENT}public {property_type(field)} {field.native_name} {{ get; set; }}"
            )
        lines.append("}")
        return lines

    def _emit_binding_class(self, ir_type: IRType) -> list[str]:
        name = ir_type.name
        lines = [
            f"public class {name}Impl : {graph_class(ir_type)}<{name}>",
            "{",
            f"{INDENT}public {name}Impl()",
            f"{INDENT}{{",
            f"{INDENT * 2}Name = nameof({name});",
            "",
        ]
        for field in ir_type.fields:
            lines.append(f"{INDENT * 2}{binding_statement(field, ir_type)}")
        lines.append(f"{INDENT}}}")
        lines.append("}")
        return lines

    def emit_enums(self, ir: IRSchema) -> str:
        """Emit a C# enum and an EnumerationGraphType binding per GraphQL enum."""
        lines: list[str] = []
        for name, values in ir.enums.items():
            lines.append(f"public enum {name}")
            lines.append("{")
            lines.extend(f"{INDENT}{value}," for value in values)
            lines.append("}")
            lines.append(f"public class {name}Impl : EnumerationGraphType<{name}>")
            lines.append("{")
            lines.append("}")
        return "".join(line + NEWLINE for line in lines)

    def emit_schema_class(self, ir: IRSchema) -> str:
        """Emit the Schema subclass wiring the Query and Mutation roots, if any."""
        if ir.query is None and ir.mutation is None:
            return ""
        class_name = f"{self.client_class_name}Schema"
        lines = [
            f"public class {class_name} : Schema",
            "{",
            f"{INDENT}public {class_name}()",
            f"{INDENT}{{",
        ]
        if ir.query is not None:
            lines.append(f"{INDENT * 2}Query = new {ir.query.name}Impl();")
        if ir.mutation is not None:
            lines.append(f"{INDENT * 2}Mutation = new {ir.mutation.name}Impl();")
        lines.append(f"{INDENT}}}")
        lines.append("}")
        return "".join(line + NEWLINE for line in lines)

    def render_file(self, ir: IRSchema, body: str | None = None) -> str:
        """Render the complete GeneratedTypes.cs contents.

        Args:
            ir: The schema IR
            body: Pre-rendered class definitions (e.g. from a template);
                  defaults to emit(ir)
        """
        if body is None:
            body = self.emit(ir)
        header = [
            "// <auto-generated>",
            "//     Generated by gql-netgen. Do not edit by hand.",
            "// </auto-generated>",
        ]
        header.extend(f"using {using};" for using in USINGS)
        header.append("")
        header.append(f"namespace {self.namespace};")
        header.append("")
        return (
            "".join(line + NEWLINE for line in header)
            + self.emit_enums(ir)
            + body
            + self.emit_schema_class(ir)
        )
