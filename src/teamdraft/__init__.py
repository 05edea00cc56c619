"""Engagement-balanced team drafting."""
