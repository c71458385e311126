"""
Shared module package.

Contains cross-cutting concerns used across layers:
- Error handling and response materialization
- Request context middleware
- Rate limiting and environment guards
- Logging configuration
"""
