"""
Test suite for HYDRA reward vault

Contains:
- tests/unit/          : Unit tests for individual modules
"""
