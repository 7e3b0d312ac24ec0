"""External service clients and server-side business logic."""
