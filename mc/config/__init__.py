"""Config folder handling: location, schema, migration and validation."""
