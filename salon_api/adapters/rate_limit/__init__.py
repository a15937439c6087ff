"""Rate limiting adapters.

The public endpoints depend on the abstract limiter in ``base`` so the
in-memory sliding window can be replaced by a shared store later without
touching the API layer.
"""
