"""
Simulator Tests

Tests for the elevator state machine, scenarios and the simulation runner.
"""
