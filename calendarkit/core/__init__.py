"""Time, timezone and collaborator protocol utilities for calendarkit."""
