"""Root pytest configuration (kept intentionally minimal).

The application package resides in the nested `receipt_points/`
directory. pyproject.toml puts `backend/` on the pytest path, so no
path manipulation happens here.
"""
