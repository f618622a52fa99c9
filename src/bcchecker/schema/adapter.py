"""
Schema collaborators consumed by the check pipeline.

The pipeline never inspects schemas itself. It needs four operations, captured
by the :class:`SchemaAdapter` protocol:

- ``parse_schema_text``: SDL text -> schema handle
- ``render_canonical_schema_text``: schema handle -> sorted, stable SDL text
- ``compare_for_breaking_changes`` / ``compare_for_dangerous_changes``:
  (old, new) -> list of :class:`ChangeEntry`

:class:`GraphQLSchemaAdapter` implements them with ``graphql-core``. Any schema
handle it receives may be a ``GraphQLSchema`` or raw SDL text.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Protocol, runtime_checkable

from graphql import (
    GraphQLSchema,
    build_schema,
    find_breaking_changes,
    find_dangerous_changes,
    lexicographic_sort_schema,
    print_schema,
)

from bcchecker.core.contracts.change import ChangeEntry


@runtime_checkable
class SchemaAdapter(Protocol):
    """Operations the check pipeline needs from a schema library."""

    def parse_schema_text(self, text: str) -> Any: ...

    def render_canonical_schema_text(self, schema: Any) -> str: ...

    def compare_for_breaking_changes(self, old: Any, new: Any) -> list[ChangeEntry]: ...

    def compare_for_dangerous_changes(self, old: Any, new: Any) -> list[ChangeEntry]: ...


def _to_entries(changes: Iterable[Any]) -> list[ChangeEntry]:
    """Convert graphql-core ``BreakingChange``/``DangerousChange`` tuples."""
    return [
        ChangeEntry(kind=change.type.name, description=change.description) for change in changes
    ]


class GraphQLSchemaAdapter:
    """:class:`SchemaAdapter` backed by ``graphql-core``."""

    def as_schema(self, schema: GraphQLSchema | str) -> GraphQLSchema:
        """Return ``schema`` as a ``GraphQLSchema``, building it from SDL if needed."""
        if isinstance(schema, GraphQLSchema):
            return schema
        return self.parse_schema_text(schema)

    def parse_schema_text(self, text: str) -> GraphQLSchema:
        return build_schema(text)

    def render_canonical_schema_text(self, schema: GraphQLSchema | str) -> str:
        """Print the schema with types, fields and arguments sorted by name."""
        return print_schema(lexicographic_sort_schema(self.as_schema(schema)))

    def compare_for_breaking_changes(
        self, old: GraphQLSchema | str, new: GraphQLSchema | str
    ) -> list[ChangeEntry]:
        return _to_entries(find_breaking_changes(self.as_schema(old), self.as_schema(new)))

    def compare_for_dangerous_changes(
        self, old: GraphQLSchema | str, new: GraphQLSchema | str
    ) -> list[ChangeEntry]:
        return _to_entries(find_dangerous_changes(self.as_schema(old), self.as_schema(new)))


__all__ = ["GraphQLSchemaAdapter", "SchemaAdapter"]
