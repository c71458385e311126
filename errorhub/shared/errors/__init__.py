"""
Shared error handling package.

Centralizes error-to-HTTP mapping so that domain errors and handled
outcomes are consistently translated into API responses.
"""
