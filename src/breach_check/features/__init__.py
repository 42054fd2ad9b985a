"""Feature modules: cache, database (record store) and lookup."""
