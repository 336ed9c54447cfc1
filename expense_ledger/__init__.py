"""
Expense Ledger

A personal expense ledger: an in-memory store of expense records with
aggregate queries, persisted to a CSV file on request.

DESIGN PRINCIPLES:
1. The store is the only owner of live records
2. Record ids never change
3. "Not found" is an answer, not an error
4. A malformed data file fails the whole load
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Expense Ledger Team"
