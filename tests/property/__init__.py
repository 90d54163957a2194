"""
Participle Atlas - Property-Based Testing Suite

Hypothesis strategies and invariants for tagged tokens, clitic chains,
extracted rows and aggregate tables.
"""
