"""
Core domain models, errors, and exported contracts.

This module contains the foundational building blocks that are independent
of the registry, ledger and coordinator implementations.
"""
