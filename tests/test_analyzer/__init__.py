"""
Analyzer Tests
"""
