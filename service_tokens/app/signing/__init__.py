"""
Token signing package.

Wraps PyJWT's RS256 implementation. Cryptographic primitives are never
implemented here; key parsing and signing are delegated to PyJWT and
``cryptography``.
"""
