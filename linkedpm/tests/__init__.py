# linkedpm/tests/__init__.py
"""
LinkedPM: Test Suite

Run all tests:
    pytest linkedpm/tests
    python -m linkedpm.tests.test_integration

Test coverage:
    - Path parsing and key derivation
    - Chain table and deployment artifacts
    - Variant detection and contract resolution
    - Signer transaction flow
    - End-to-end zone/revision flows on L1 and L2 (in-memory chain)
"""

from .test_integration import run_tests

__all__ = ["run_tests"]
