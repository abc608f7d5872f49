"""Infrastructure integrations for permission-gate."""
