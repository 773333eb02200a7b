"""Fukuro Studio quote service — pricing engine, intake reconciliation and project dashboard."""

__version__ = "0.1.0"
