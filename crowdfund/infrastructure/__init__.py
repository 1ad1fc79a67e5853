"""Infrastructure — database sessions, project stores and logging setup."""
