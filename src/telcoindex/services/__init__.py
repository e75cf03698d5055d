"""Services package - import from subdirectories directly.

Subpackages:
- config: TCI fitting and reporting settings
- benchmarks: Benchmark registry
- leaderboard: Leaderboard ingestion and rankings
- tci: Score matrix, IRT fitting and composite scoring
- trends: Regression, forecasting, release dates and frontiers
"""
