"""
Tests for the search pipeline.
"""
