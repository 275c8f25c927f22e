from __future__ import annotations


class OwnershipError(AssertionError):
    """Raised when the exclusive/shared ownership protocol has been broken.

    This is never a user error: it means some code path duplicated a node that
    still owns an exclusive child, or tried to mutate a node that is reachable
    through a shared slot. It is not caught anywhere inside the package.
    """


__all__ = ["OwnershipError"]
