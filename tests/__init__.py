"""
Test Suite for Evaluation Board.

Test organization:
    - unit/: Unit tests for individual components
    - integration/: Gesture sequences and provider/registry wiring
    - fixtures/: Shared sample configuration

Running Tests:
    pytest tests/                           # All tests
    pytest tests/unit/                      # Unit tests only
    pytest tests/integration/               # Integration tests only
    pytest --cov=src/evaluation_board       # With coverage
"""
