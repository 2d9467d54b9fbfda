"""Command-line interface for orm-json-schema."""
