"""API testing: framework, step definitions and scenarios."""
