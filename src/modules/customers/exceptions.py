"""Customer domain exceptions.

Raised by the Service Layer; the views translate them into HTTP responses.
"""

from __future__ import annotations


class CustomerAlreadyExists(Exception):
    """A customer with the same email already exists."""


class CustomerNotFound(Exception):
    """The requested customer does not exist or has been soft-deleted."""
