"""
Test suite for the property valuation calculator

Contains:
- tests/unit/          : Unit tests for individual modules
"""
