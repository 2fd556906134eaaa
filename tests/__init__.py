"""
Test suite for House Swap

Contains:
- tests/unit/          : Unit tests for coordinator, registry, ledger, models and contracts
"""
