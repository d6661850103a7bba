"""Mood journal domain: entries, moods, filters and derived views."""
