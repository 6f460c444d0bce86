"""
Shared utilities for the edge configuration API client.

This package aggregates common building blocks consumed by every API
binding:

- config: Client settings via pydantic-settings
- logging: Structured logging with request correlation
- metrics: Prometheus counters for outbound calls
- errors: Canonical error types
- retry: Retry decorator for transport failures
- session: HTTP transport shared by the bindings

Do not import from service_* packages into shared/.
"""
