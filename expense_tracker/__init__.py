"""
Expense Tracker - Source Package

A command-line expense tracker for a shared machine. Users add, list and
delete their own expenses; an administrator can act on anyone's and
point the tool at another database. Every add and delete is written to
an append-only audit log.
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
