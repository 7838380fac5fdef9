"""
Test suite for pool-ledger

Contains:
- tests/unit/          : Unit tests for math primitives, engine and contracts
"""
