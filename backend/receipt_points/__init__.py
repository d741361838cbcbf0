"""Top-level package for the receipt points API.

This package contains everything required to run the FastAPI backend
that accepts receipts, validates them into immutable ``Receipt``
entities and awards points according to a fixed set of rules. The
pure pieces (normalizer and points calculator) live in
``receipt_points.services`` and have no knowledge of HTTP or storage.

To run the API locally you can execute:

```bash
uvicorn receipt_points.api.main:app --reload
```

or simply ``python -m receipt_points``. Configuration values can be
overridden using environment variables or a ``.env`` file at the
project root.
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
