"""
Unit Tests - Testing Individual Components in Isolation.

Each component is tested in isolation with a pinned clock.
Unit tests should be fast, deterministic, and focused.
"""
