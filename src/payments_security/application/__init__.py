"""Application layer - What the booking flow calls.

PaymentOrchestrator (use_cases) composes the RateLimiter and the
SignatureVerifier (services) with the IntegrityChecker from the domain,
and reaches storage, locks, the clock and the payment gateway only
through the ABCs in ports. Results cross the boundary as the dataclasses
in dtos.
"""
