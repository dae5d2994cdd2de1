"""
Test suite for numint

Contains:
- tests/unit/          : Unit tests for individual modules
"""
