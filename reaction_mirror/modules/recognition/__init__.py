"""Gesture recognition module."""
from .gesture_classifier import GestureClassifier
from .temporal_filter import StabilityFilter

__all__ = [
    "GestureClassifier",
    "StabilityFilter",
]
