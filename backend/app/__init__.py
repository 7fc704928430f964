"""Shared stock watchlist service."""
