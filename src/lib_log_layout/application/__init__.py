"""Application layer: ports and the formatting use case."""
