"""Default configurations."""
