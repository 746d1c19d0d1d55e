"""API Template service package."""
