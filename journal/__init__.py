"""Journal search backend: cross-entity search over collections, items and tags."""
