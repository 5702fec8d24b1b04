"""
Classflow: a classroom assignment lifecycle engine.

Students are enrolled in a roster, assignments move through a small status
lifecycle (released, working, submitted, graded) and an observer is notified
at every transition.
"""

__version__ = "1.0.0"
__author__ = "Classflow Development Team"
__description__ = "Classroom assignment lifecycle and notification engine"
