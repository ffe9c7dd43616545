"""Domain layer: enums, exceptions, task workflow and role capabilities."""
