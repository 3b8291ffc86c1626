"""Services Layer — imperative shell around the pure core.

Invariants:
    - Services receive their RoundStore explicitly; no module-level store handle
    - Services flush but never commit: the caller owns the transaction
"""
