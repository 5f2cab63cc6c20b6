"""
Integration Tests - Full Gesture Sequences.

These tests drive the engine through the gesture interface the way a
board UI would, using the demo provider and the pipeline registry.
"""
