"""Error taxonomy shared by the receipt core and the storage layer.

Two independent families exist and must never be conflated:

* ``ReceiptError``: raised while turning raw input into a
  ``Receipt``. The only concrete kind is ``InvalidReceiptFieldError``.
* ``StorageError``: raised by the record store. ``RecordNotFoundError``
  is the only concrete kind and maps to a not-found response.
"""

from __future__ import annotations


class ReceiptError(Exception):
    """Base error for receipt validation."""


class InvalidReceiptFieldError(ReceiptError):
    """A single receipt field is missing, has the wrong type or cannot be parsed.

    ``field`` names the offending input key (``items[2].price`` for
    nested values) and ``detail`` is the human readable reason.
    """

    def __init__(self, field: str, detail: str) -> None:
        self.field = field
        self.detail = detail
        super().__init__(f"Invalid field type for receipt. {detail}")


class StorageError(Exception):
    """Base error for the record store."""


class RecordNotFoundError(StorageError):
    """Raised when no record exists for the requested id."""

    def __init__(self, id: str) -> None:
        self.id = id
        super().__init__(f'Record for id "{id}" not found.')


__all__ = [
    "ReceiptError",
    "InvalidReceiptFieldError",
    "StorageError",
    "RecordNotFoundError",
]
