"""
Shared helpers for references, paths and console formatting.
"""
