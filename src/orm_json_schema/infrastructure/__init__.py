"""Infrastructure layer: schema derivation engine and ORM introspection."""
