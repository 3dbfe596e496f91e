"""REST API for monthly box-office rankings."""
