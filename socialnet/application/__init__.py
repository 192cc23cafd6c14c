"""Application layer orchestrating the domain through use cases."""
