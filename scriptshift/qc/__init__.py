"""Quality checks for schema documents."""
