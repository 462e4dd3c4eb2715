"""Test fixtures for the lab engine.

This package provides reusable test fixtures:
- lab: Engine fixtures (filesystem, network simulator, processor, terminal)
- api: FastAPI TestClient and session registry fixtures
"""
