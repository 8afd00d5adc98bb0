"""
zkcall Test Suite
=================

Test organization:
- tests/unit/          - Unit tests (no network, mock contract client)

Run tests:
    pytest                          # All tests
    pytest tests/unit               # Unit tests only
    pytest --cov=zkcall             # With coverage
"""
