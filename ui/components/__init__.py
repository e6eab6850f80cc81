"""Reusable rendering components."""
