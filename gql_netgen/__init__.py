"""Generate C# classes and GraphQL.NET bindings from GraphQL schemas."""
