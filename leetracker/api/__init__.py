"""HTTP API for LeeTracker."""
