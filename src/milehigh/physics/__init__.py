"""Geometry and collision prediction for the planner."""
