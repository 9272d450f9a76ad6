"""
Service layer for the transaction dashboard.

This package contains the per-session state object and the service that
parses upload batches into it and builds chart payloads from it.
"""
