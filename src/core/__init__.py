"""
Core domain models, mathematical primitives, and errors.

This module contains the foundational building blocks that are independent
of external systems (exchanges, databases, etc.).
"""
