"""SKU domain exceptions.

Raised by the allocator, the service and the repositories.  Malformed
codes and unknown attribute values are *not* exceptions: they come back
as structured results or fallback codes.
"""

from __future__ import annotations


class CatalogUnavailable(Exception):
    """The catalog repository could not answer an existence check.

    The original error is chained as ``__cause__``.
    """


class SkuCollisionError(Exception):
    """Every regeneration attempt produced a SKU that is already taken."""


class SkuAlreadyReserved(Exception):
    """The SKU is already recorded in the catalog."""
