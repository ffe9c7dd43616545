"""Use cases: task operations, managers, client accounts, analytics."""
