"""Parametric analysis for ColdSize.

Sweeps of one input across a range of values, reporting how the
refrigeration capacity and heat split respond.
"""
