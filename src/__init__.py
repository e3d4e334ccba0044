"""
Dashboard Data Service

Read-only service that turns spreadsheet workbooks into dashboard payloads:
1. Client Report - per-client SEO workbook reshaped into report sections
2. Service Rollup - shared services workbook aggregated per location
"""

__version__ = "0.1.0"
