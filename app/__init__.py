"""Premia voting backend."""
