"""Logger lookup for irulefmt modules.

Every library logger lives under the ``irulefmt`` namespace, so a host
application can silence or enable the formatter's debug output with one
``logging.getLogger("irulefmt")`` call.
"""

from __future__ import annotations

import logging

_NAMESPACE = "irulefmt"


def get_logger(name: str) -> logging.Logger:
    """Return the stdlib logger for ``name`` inside the irulefmt namespace.

    Names already under the namespace (``__name__`` of a package module)
    are used as-is; anything else is nested below it.

    Example:
        >>> get_logger("irulefmt.formatter").name
        'irulefmt.formatter'
        >>> get_logger("cli").name
        'irulefmt.cli'
    """
    if name != _NAMESPACE and not name.startswith(f"{_NAMESPACE}."):
        name = f"{_NAMESPACE}.{name}"
    return logging.getLogger(name)
