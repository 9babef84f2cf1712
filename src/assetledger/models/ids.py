"""ULID-based ID generation for ledger transactions.

ULIDs sort lexicographically by creation time when generated in different
milliseconds, which keeps transaction ids in log output roughly ordered.
"""

from ulid import ULID


def generate_id() -> str:
    """Generate a new ULID string.

    Example:
        >>> len(generate_id())
        26
    """
    return str(ULID())
