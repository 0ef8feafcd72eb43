"""
Bottle Kernel - in-memory inventory ledger

A single-session stock ledger for bottled products with:
- Name-unique item records and monotonically assigned IDs
- Running per-name and grand-total counters
- Sticky breakage flagging with an event log
- Outcome values for every mutation (no partial writes)
"""

__version__ = "0.1.0"
