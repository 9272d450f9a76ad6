"""
Core processing modules for the transaction dashboard.

This package contains:
- aggregate: Chronological ordering, running totals and summary statistics
- config: Application configuration and settings
- exceptions: Custom exception classes
- filters: Inclusion and merchant/date selection filters
- logger: Logging configuration
- merchants: Merchant multi-select state transitions
- normalize: Amount cleaning and date resolution
- parsing: CSV export parsing
- pipeline: View computation over raw transactions and filters
- presentation: Chart series and summary data for the front end
- schema: Pydantic models for transactions, filters and views
"""
