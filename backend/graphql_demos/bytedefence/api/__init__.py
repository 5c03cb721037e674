"""ByteDefence GraphQL API — orders, order items and role-guarded mutations."""
