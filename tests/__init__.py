"""
Test suite for the price-insurance formula engine

Contains:
- tests/unit/          : Unit tests for individual formulas and models
"""
