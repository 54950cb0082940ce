"""
ACL path package.

Models the ``acl`` claim carried by issued tokens: which API path patterns
the token may be used against and, per path, which options apply (for
example the allowed HTTP methods).

Key points:
- Every path maps to an options object, never a scalar or null.
- Bulk path data may mix bare paths and paths with options.
"""
