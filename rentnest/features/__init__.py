"""
Feature packages. Each vertical slice keeps its domain, services and jobs together.
"""
