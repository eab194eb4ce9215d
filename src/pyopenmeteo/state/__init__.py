"""State/store layer.

This package holds the object-store seam, the tree-validity policy and
the reconciliation pass that keeps the persisted tree in line with the
current configuration.
"""
