"""
Controller Tests

Tests for the dispatcher and allocation strategies.
"""
