"""
REST API security test suites.

Kept importable so `run_tests.py`, IDEs and CI jobs can import the framework
and step definitions directly.

All content is demo-safe and does not include production secrets.
"""
