"""Primary key generation for users, managers, client accounts and tasks."""

from cuid2 import cuid_wrapper

_next_cuid = cuid_wrapper()


def generate_cuid() -> str:
    """Return a new CUID2 string, used as the default primary key of every table."""
    return str(_next_cuid())
