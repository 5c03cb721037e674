"""Service layer — authentication, order persistence and notification forwarding."""
