"""Scoring module for the Memory Score engine.

Implements the complete diagnostic pipeline:
  Stage Scorer → Aggregator (geometric mean + status bands)
  → Decay Projector → Comparator (gaps vs competitor or benchmark)
"""
