"""GraphQL Error Codes — schema extension that stamps ServiceError codes onto GraphQL errors.

Invariants:
    - Errors whose original exception is a ServiceError carry extensions.code
    - Parse/validation errors (no original exception) pass through untouched
    - Subclasses override process() to remap errors; the rewrite happens once per operation
"""

import logging
from typing import Iterator

from graphql import GraphQLError
from strawberry.extensions import SchemaExtension

from graphql_demos.common.errors import ServiceError

logger = logging.getLogger(__name__)


def with_extensions(
    error: GraphQLError, extensions: dict, message: str | None = None,
) -> GraphQLError:
    """Copy a GraphQLError with merged extensions and an optional new message."""
    return GraphQLError(
        message if message is not None else error.message,
        nodes=error.nodes,
        source=error.source,
        positions=error.positions,
        path=error.path,
        original_error=error.original_error,
        extensions={**(error.extensions or {}), **extensions},
    )


class ErrorCodeExtension(SchemaExtension):
    """Write ServiceError.code into each GraphQL error's extensions."""

    def on_operation(self) -> Iterator[None]:
        yield
        result = self.execution_context.result
        errors = getattr(result, "errors", None)
        if not errors:
            return
        result.errors = [self.process(error) for error in errors]

    def process(self, error: GraphQLError) -> GraphQLError:
        original = error.original_error
        if isinstance(original, ServiceError):
            logger.info(
                f"GraphQL operation failed: {original.message}",
                extra={"error_code": original.code},
            )
            return with_extensions(error, original.graphql_extensions())
        return error
