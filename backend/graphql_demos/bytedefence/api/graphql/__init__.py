"""GraphQL layer — strawberry types, role guards, error filter and the assembled schema."""
