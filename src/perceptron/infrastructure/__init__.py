"""Infrastructure layer - configuration, persistence and data loading.

This package contains the concrete implementations that connect the
domain engine to files: YAML configuration, JSON model snapshots and
training data sets.
"""
