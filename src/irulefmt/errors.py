"""Exception classes for irulefmt.

Formatting well-formed trees never fails. The exceptions here report trees
that break the data model's contract, and serialized input that cannot be
turned into a tree.
"""

from __future__ import annotations


class IruleFmtError(Exception):
    """Base exception for all irulefmt errors."""

    pass


class FormatError(IruleFmtError):
    """Contract violation found while formatting a tree.

    Raised for trees the formatter has no rendering for, such as an
    ``IfElseIf`` without branches or an object that is not a tree node.
    """

    def __init__(self, message: str, node_type: str | None = None) -> None:
        """Initialize format error.

        Args:
            message: Description of the violation
            node_type: Class name of the offending node (optional)
        """
        self.message = message
        self.node_type = node_type

        prefix = f"{node_type}: " if node_type else ""
        super().__init__(f"{prefix}{message}")


class SerializationError(IruleFmtError, ValueError):
    """Serialized tree data is malformed.

    Subclasses ValueError so callers that only expect the standard
    exception keep working.
    """

    pass
