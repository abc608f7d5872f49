"""Feature modules for permission-gate."""
