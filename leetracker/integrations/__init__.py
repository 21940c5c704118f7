"""External service integrations for LeeTracker."""
