"""GraphQL Error Filter — normalizes resolver exceptions into ByteDefence error codes.

Invariants:
    - AuthenticationError → message "Unauthorized", code UNAUTHENTICATED
    - AuthorizationError → code FORBIDDEN
    - Not-found, input validation and pydantic ValidationError → code BAD_REQUEST
    - Any other exception → its own message, code SERVER_ERROR
    - Errors without an original exception (parse/validation) pass through
"""

import logging

from graphql import GraphQLError
from pydantic import ValidationError

from graphql_demos.common.errors import (
    AuthenticationError, AuthorizationError, InputValidationError, ResourceNotFoundError,
)
from graphql_demos.common.graphql_errors import ErrorCodeExtension, with_extensions

logger = logging.getLogger(__name__)


class ByteDefenceErrorFilter(ErrorCodeExtension):
    def process(self, error: GraphQLError) -> GraphQLError:
        original = error.original_error
        if original is None:
            return error
        if isinstance(original, AuthenticationError):
            return with_extensions(error, {"code": "UNAUTHENTICATED"}, message="Unauthorized")
        if isinstance(original, AuthorizationError):
            return with_extensions(error, {"code": "FORBIDDEN"}, message=original.message)
        if isinstance(original, (ResourceNotFoundError, InputValidationError, ValidationError)):
            return with_extensions(error, {"code": "BAD_REQUEST"})
        logger.error(f"Unhandled resolver error: {original}", exc_info=original)
        return with_extensions(error, {"code": "SERVER_ERROR"}, message=str(original))
