"""
Token service package.

Issues signed JWTs that let an application call a set of APIs. It is
intentionally small and focused:

- app.acl: ACL path models and claim rendering.
- app.signing: RS256 signer bound to the application's private key.
- app.issuing: TokenGenerator builder and the one-shot factory.

Design notes:
- Keep the package import side-effects minimal; nothing here performs IO.
  Key material and the current time are supplied by the caller.
- Use the shared/ utilities for logging, configuration, and errors.
"""
