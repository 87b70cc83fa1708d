"""Application services for calculations and exports."""
