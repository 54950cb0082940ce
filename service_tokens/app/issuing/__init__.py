"""
Token issuing package.

Contains the ``TokenGenerator`` builder, which assembles the claims for an
application token (expiry, JWT ID, not-before, subject, ACL paths, custom
claims) and hands them to the RS256 signer, plus the one-shot ``factory``.
"""
