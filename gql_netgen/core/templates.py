"""Template-based rendering of the generated C# classes.

Renders Jinja2 templates to produce the same class definitions as
CodeGenerator.emit, so users can restyle the output without touching code.

Supports custom templates via the template_dir parameter:
    renderer = TemplateRenderer(template_dir="./my_templates")
    body = renderer.emit(ir)

Template lookup order:
1. User's template directory (if provided)
2. Package default templates
"""

from pathlib import Path
from typing import Optional

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader

from .generator import binding_statement, graph_class, property_type, type_hint
from .ir import IRSchema

TYPES_TEMPLATE = "types.cs.j2"


class TemplateRenderer:
    """Renders IR through the ``types.cs.j2`` template.

    Available templates to override:
        - types.cs.j2: data classes and GraphQL.NET bindings

    Filters available to templates: property_type, graph_class, binding,
    type_hint.
    """

    def __init__(self, template_dir: Optional[str] = None):
        self.template_dir = template_dir

        # Build template loader - custom templates take precedence
        loaders = []
        if template_dir:
            template_path = Path(template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
        loaders.append(PackageLoader("gql_netgen", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=False,
            keep_trailing_newline=True,
        )
        self.env.filters["property_type"] = property_type
        self.env.filters["graph_class"] = graph_class
        self.env.filters["binding"] = binding_statement
        self.env.filters["type_hint"] = type_hint

    def emit(self, ir: IRSchema) -> str:
        """Render every type, then every input, through the types template."""
        template = self.env.get_template(TYPES_TEMPLATE)
        return template.render(types=list(ir.get_all_types().values()))
