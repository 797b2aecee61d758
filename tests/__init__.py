"""Test suite for Bugwatch."""
