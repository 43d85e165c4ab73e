"""
Shared utilities for the simple-acl decision engine.

This package aggregates the ambient building blocks used by the engine:

- config: Engine configuration via pydantic-settings
- logging: Structured logging with structlog
- metrics: Prometheus decision metrics
- errors: Canonical error types and responses
- test_helpers: Factories shared by the test suites

Only test_helpers may import from simple_acl.
"""
