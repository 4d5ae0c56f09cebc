"""
Lonerbox Data
=============

Casualty-record dashboard.

- CSV loading is in `lonerbox_data/loader.py`.
- Summaries (grouped counts, verdicts, time bins, filters) are in
  `lonerbox_data/aggregate.py`.
- Chart geometry is in `lonerbox_data/layout.py`; plotly figures in
  `lonerbox_data/charts.py`.
- The Streamlit pages live in `apps/` and are routed by `dashboard_home.py`.
"""

__version__ = "0.1.0"
