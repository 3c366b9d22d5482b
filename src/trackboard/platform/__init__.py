"""Cross-cutting concerns: configuration and structured logging."""
