"""
Inventory catalog test suite.

Tests are organized by area:
- custom ID template, element, pattern and date formatting units
- generator behavior against an in-memory store
- inventory and item workflows against SQLite
- JSON API routes and CLI commands
"""
