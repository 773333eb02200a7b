"""Data models — enums, value schemas and the intake state."""
