"""Tests for command implementation modules.

Test Files and Coverage:
========================

| Test File        | Test Classes                          | Tested Constructs                | Tested Functionalities                              |
|------------------|---------------------------------------|----------------------------------|-----------------------------------------------------|
| test_compare.py  | CompareScenarioTest                   | do_compare(), CrossComparator    | Identical/near/disjoint pairs, empty and failed files |
|                  | CompareFetchTest                      | CrossComparator                  | Fetch memoization, concurrency bound, listing abort |
|                  | GroupByTextTest                       | group_by_text()                  | Grouping of equal normalized texts                  |
"""
