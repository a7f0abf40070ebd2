"""Utility helpers for the Bing Ads API client."""
