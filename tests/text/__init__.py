"""Tests for text module.

Test Files and Coverage:
========================

| Test File            | Test Classes                          | Tested Constructs                     | Tested Functionalities                  |
|----------------------|---------------------------------------|---------------------------------------|-----------------------------------------|
| test_normalize.py    | NormalizeTest, NormalizedTextTest     | normalize(), NormalizedText           | Comment stripping order, idempotence    |
| test_similarity.py   | LevenshteinDistanceTest, SimilarityTest | levenshtein_distance(), similarity() | Known and long-text distances, symmetry |
"""
