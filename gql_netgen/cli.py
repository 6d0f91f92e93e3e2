"""Command-line interface for gql-netgen."""

import logging

import click

from .core.auth import HeaderAuth
from .core.errors import GenerationError
from .core.pipeline import generate, validate_names
from .core.scalars import ScalarMap
from .core.source import is_endpoint, load_schema_source


@click.command()
@click.version_option(package_name="gql-netgen")
@click.argument("source")
@click.option(
    "--header",
    "-h",
    "header_values",
    default=None,
    help='Headers to pass to the GraphQL introspection endpoint. Use "Authorization=Bearer eyJraWQ,X-API-Key=abc,...".',
)
@click.option(
    "--namespace",
    "-n",
    default="Generated",
    show_default=True,
    help="Namespace to generate code under.",
)
@click.option(
    "--client-class-name",
    "-c",
    default="GraphQLClient",
    show_default=True,
    help="Name for the client class; the generated schema class is <name>Schema.",
)
@click.option(
    "--scalar-mapping",
    "-m",
    default=None,
    help='Map of custom schema scalar types to dotnet types. Use "GqlType=DotNetClassName,ID=Guid,...".',
)
@click.option(
    "--output",
    "-o",
    "output_dir",
    default="output",
    show_default=True,
    type=click.Path(file_okay=False),
    help="Output directory.",
)
@click.option(
    "--template-dir",
    default=None,
    type=click.Path(exists=True, file_okay=False),
    help="Directory with a custom types.cs.j2 template.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def main(
    source: str,
    header_values: str | None,
    namespace: str,
    client_class_name: str,
    scalar_mapping: str | None,
    output_dir: str,
    template_dir: str | None,
    verbose: bool,
):
    """Generate C# classes and GraphQL.NET bindings from a GraphQL schema.

    SOURCE is a schema file (.graphql SDL or .json introspection result)
    or the URL of a GraphQL endpoint to introspect.

    Examples:

        gql-netgen schema.graphql -n MyApp.Api

        gql-netgen https://api.example.com/graphql -h "Authorization=Bearer abc" -m "ID=Guid"
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        validate_names(namespace, client_class_name)

        if is_endpoint(source):
            click.echo(f"Loading from {source}...")
        else:
            click.echo(f"Loading {source}...")
        schema_source = load_schema_source(source, HeaderAuth.from_argument(header_values))

        scalar_map = ScalarMap.from_argument(scalar_mapping)
        if verbose:
            click.echo(f"  Format: {'introspection' if schema_source.is_introspection else 'SDL'}")
            click.echo(f"  Scalar mapping: {scalar_map.as_dict()}")

        click.echo(f"Generating types in namespace {namespace}...")
        result = generate(
            schema_source,
            output_dir,
            scalar_map=scalar_map,
            namespace=namespace,
            client_class_name=client_class_name,
            template_dir=template_dir,
        )
    except GenerationError as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        click.echo(f"  Types: {len(result.ir.types)}")
        click.echo(f"  Inputs: {len(result.ir.inputs)}")
        click.echo(f"  Enums: {len(result.ir.enums)}")

    click.echo(f"Done! Generated code in {result.output_path}")


if __name__ == "__main__":
    main()
