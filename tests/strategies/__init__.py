"""Reusable Hypothesis strategies for test data generation."""
