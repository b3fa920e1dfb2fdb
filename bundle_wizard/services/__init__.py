"""
Services Package for Bundle Wizard
==================================

Service modules that sit between the HTTP routes and the pure wizard logic:

- **catalog**: Read-only catalog queries (bundle, components, flavors)
- **wizard_sessions**: In-memory cache of open wizards

Services receive their dependencies (database sessions) rather than creating
them, so they are easy to exercise in tests.
"""
