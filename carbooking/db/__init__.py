"""Key-value table backing the SQL storage backend."""
