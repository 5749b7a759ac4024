'''
Outreach Analytics Test Suite

Test Modules:
-------------
- test_normalizer.py: Numeric coercion, coercion warnings, filter semantics
- test_aggregation.py: Bucket keys, sum invariant, ordering, totals, network
- test_forecasting.py: Least-squares trend, direction rule, forecasts, intervals
- test_scoring.py: Composite score, tier ladder, goals, team comparison, benchmarks
- test_insights.py: Individual insight rules and priority ordering
- test_analytics.py: End-to-end computation passes and the result cache
- test_ingestion.py: Sheet rows / CSV ingestion and CSV export
- test_api.py: FastAPI route handlers

Running Tests:
--------------
    pip install -e ".[test]"
    pytest
    pytest -m parity
'''
