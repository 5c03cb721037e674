"""GraphQL layer — strawberry types, resolvers and the assembled schema."""
