"""
Command-line interface and console rendering.
"""
