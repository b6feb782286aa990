"""
Test suite for fixedpoint

Contains:
- tests/unit/          : Unit tests for individual modules
"""
