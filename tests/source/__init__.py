"""Tests for source module.

Test Files and Coverage:
========================

| Test File            | Test Classes                       | Tested Constructs                 | Tested Functionalities                     |
|----------------------|------------------------------------|-----------------------------------|--------------------------------------------|
| test_source.py       | IsSourcePathTest                   | is_source_path()                  | Extension allow-list, excluded directories |
| test_identifier.py   | ParseRepositoryTest                | parse_repository(), RepositoryId  | URLs, owner/repo tokens, invalid formats   |
| test_github.py       | GitHubSourceTest                   | GitHubSource                      | Tree listing, blob fetch, HTTP failures    |
"""
