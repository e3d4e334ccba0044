"""HTTP endpoints for the dashboard data service."""
