"""Application layer: ports and the use cases composing the log pipeline."""
