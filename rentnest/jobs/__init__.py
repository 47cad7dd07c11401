"""
Command-line job runners.
"""
