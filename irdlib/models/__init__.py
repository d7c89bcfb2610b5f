"""Interest rate models."""
