"""FastAPI integration: raw-body capture, signature dependency, reference receiver."""
