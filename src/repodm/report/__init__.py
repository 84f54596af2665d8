"""Report module for match classification and reporting.

This package contains:
- match: Match, MatchKind and MatchRule for classifying scored file pairs
- summary: ComparisonReport, RiskLevel and aggregation of matches
- render: Human-readable, optionally colored, report output
"""
