"""Infrastructure - database sessions, storage error mapping, the store and logging."""
