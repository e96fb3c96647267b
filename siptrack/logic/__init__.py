"""Core business logic layer.

Subpackages:
- reporting: period bucketing, aggregation, trends, mood/drink correlation
  and the dashboard payload built from them
"""
__all__ = ["reporting"]
