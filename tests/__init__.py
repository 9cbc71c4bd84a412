"""
Test suite for confidential-evm

Contains:
- tests/unit/          : Unit tests for individual modules
"""
