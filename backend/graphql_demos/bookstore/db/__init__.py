"""BookStore persistence base."""
