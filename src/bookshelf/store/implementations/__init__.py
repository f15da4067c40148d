"""Store backend implementations."""
