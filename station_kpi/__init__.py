"""
Station KPI — Performance Scoring, Aggregation & Forecasting Engine

Pure scoring backend for a ground-handling station dashboard: metric scores
against targets, weighted category rollups, quarterly/yearly windows, monthly
history synchronisation, linear-regression forecasts, and the monthly
manager competition.

To connect to a front end:
    Keep a DashboardState (station_kpi.state) and feed user actions through
    state.reduce(). Call dashboard.get_participant_overview() or
    dashboard.get_score_table() to get plain dicts/DataFrames for cards,
    ranking tables, and trend charts.

To add new metrics:
    Add an entry to config.METRIC_REGISTRY with its name, target, unit and
    lower_is_better flag, then reference its id from a category in
    config.ROLE_TEMPLATES.
"""
