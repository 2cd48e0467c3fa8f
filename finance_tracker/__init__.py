"""
Personal Finance Tracker - Source Package

A single-user tracker for income and expense transactions, category
budgets, payment reminders and simple spending reports, kept in a local
SQLite database.

DESIGN PRINCIPLES:
1. Memory is authoritative; every change is written through to the store
2. Rejected input never changes state
3. Every user operation is auditable
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Personal Finance Tracker Team"
