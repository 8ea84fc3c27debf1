"""
Sandwich - Core logic for the sandwich collection tracker.

This package contains:
- models: Domain records (SandwichCollection, Host, Project, etc.)
- duplicates: Duplicate detection and reconciliation
- data: PocketBase repositories
- csv_import: Spreadsheet import parsing
- query_cache: TTL cache for aggregate queries
- messaging: Chat message bus
"""
