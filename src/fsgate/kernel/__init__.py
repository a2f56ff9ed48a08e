"""Kernel layer - tool catalogue and dispatch."""
