"""Infrastructure: integrations with database drivers."""
