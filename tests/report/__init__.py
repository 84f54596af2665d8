"""Tests for report module.

Test Files and Coverage:
========================

| Test File            | Test Classes                     | Tested Constructs                      | Tested Functionalities                   |
|----------------------|----------------------------------|----------------------------------------|------------------------------------------|
| test_match.py        | MatchRuleTest, MatchTest         | MatchRule, classify(), Match           | Thresholds, boundaries, immutability     |
| test_summary.py      | RiskLevelTest, AggregateTest     | risk_level(), aggregate()              | Averages, ordering, empty near-match set |
| test_render.py       | RenderReportTest                 | ReportRenderer, render_report()        | Preview cap, color bands, verdicts       |
"""
