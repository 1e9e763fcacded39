"""Domain layer - Pure payment-security rules.

AttemptRecord counts an actor's attempts; OrderSnapshot and
PaymentCallback describe what the gateway and the client report; the
services compute signatures, cross-check orders, classify risk and mint
receipts. Nothing here performs I/O or reads the clock on its own.
"""
