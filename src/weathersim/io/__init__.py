"""Output encoders for generated records."""
