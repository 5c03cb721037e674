"""ByteDefence — order management demo: GraphQL API, notification relay and client."""
