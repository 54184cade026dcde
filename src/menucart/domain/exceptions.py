"""Domain-level exceptions.

All failures the cart engine reports are subclasses of DomainException so the
CLI layer can catch them uniformly and display user-friendly messages.

Note that most "bad" inputs are *not* errors here: an unknown item id or a
missing active user makes a cart operation a silent no-op, and a menu item
that disappeared from the catalog is a data condition, not an exception.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class PersistenceError(DomainException):
    """The cart store could not be written to durable storage."""


class MenuSourceError(DomainException):
    """The menu snapshot could not be read or parsed."""
