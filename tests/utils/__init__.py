"""Tests for utils module.

Test Files and Coverage:
========================

| Test File            | Test Classes     | Tested Constructs   | Tested Functionalities                       |
|----------------------|------------------|---------------------|----------------------------------------------|
| test_processor.py    | ProcessorTest    | Processor           | Pool-backed similarity rows from asyncio     |
| test_throttler.py    | ThrottlerTest    | Throttler           | Concurrency limit, results, slot release     |
"""
