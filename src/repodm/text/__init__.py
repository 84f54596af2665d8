"""Text normalization and similarity scoring.

This package contains:
- normalize: lexical normalization of source code and NormalizedText
- similarity: Levenshtein distance and the similarity ratio
"""
