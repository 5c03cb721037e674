"""BookStore GraphQL API — books, authors and reviews behind JWT-protected mutations."""
