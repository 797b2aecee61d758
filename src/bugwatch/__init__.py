"""Bugwatch: campus bug sightings grouped by location."""
