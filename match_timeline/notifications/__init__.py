"""Outbound highlight notifications."""
