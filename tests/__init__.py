"""
Model Filter - Test Suite

Test Organization:
- test_engine.py: Filter engine (configure, form data, rule application)
- test_rules.py: Rule parsing and TOML rule sets
- test_query.py: SQL and pandas query accumulators
- test_state.py: Memory and SQLite state stores
- test_config.py: Settings loading
- test_utils.py: Date normalization and logging
- test_cli.py: Command-line interface

Fixtures are in tests/fixtures/:
- recording.py: Accumulators that record the conditions they receive

Run tests:
    $ pytest tests/ -v
"""
