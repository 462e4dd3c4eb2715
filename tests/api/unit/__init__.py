"""Unit tests for API components.

This package contains isolated unit tests for:
- Request model validation
- Response model serialization
- Dependency injection
- Error handling
"""
