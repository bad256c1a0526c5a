"""Core workspace-tree machinery for Muno."""
