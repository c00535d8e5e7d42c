"""Nutrition tracking backend."""
