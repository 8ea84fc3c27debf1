"""
API Routers - Organized endpoint handlers for the Sandwich API.

Each router handles a specific domain:
- duplicates: Duplicate analysis and cleanup of sandwich collections
- collections: Collection records, totals and CSV import
- directory: Hosts, contacts and recipients
- projects: Volunteer project tracking
- messages: Team chat and weekly reports
"""
