"""
Personal Ledger - Source Package

A single-user ledger of credits and debits kept in a flat file,
with searches, monthly reports and sorting.

DESIGN PRINCIPLES:
1. Balance always equals the signed sum of transactions
2. What is written to disk reads back unchanged
3. Bad input is re-asked, never guessed at
4. Storage failures are reported, never hidden
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Personal Ledger Team"
