"""Request middleware and shared dependencies."""
