"""Capture, detection, recognition, visualization and utility modules."""
