"""
Shared utilities for the token issuer.

This package aggregates common building blocks consumed by the token
service packages:

- config: Configuration via pydantic-settings
- logging: Structured logging with application correlation
- errors: Canonical error types
- test_helpers: Key-pair and token decoding helpers for tests

Do not import from service_* packages into shared/.
"""
