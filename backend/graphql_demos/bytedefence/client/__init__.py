"""ByteDefence client — login, token persistence and the GraphQL order client."""
