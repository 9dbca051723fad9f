"""
Reaction Mirror
===============

Classifies a user's face and hand pose per video frame into one of four
gestures (neutral, thinking, confirmed, startled), debounces the result
and shows a matching reaction image.

Modules:
    - core: domain types, event bus, gesture session
    - capture: camera frame acquisition
    - detection: MediaPipe landmark source and geometry utilities
    - recognition: gesture classifier and stability filter
    - visualization: presentation sink
    - utils: configuration and logging
"""

__version__ = "1.0.0"
