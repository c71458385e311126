"""
Application layer package.

Use cases orchestrate domain objects for the administrative surface.
"""
