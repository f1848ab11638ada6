"""
Core domain models, quantity primitives, contracts and errors.

This module contains the foundational building blocks that are independent
of the hosting ledger (network, wallet, transaction submission).
"""
