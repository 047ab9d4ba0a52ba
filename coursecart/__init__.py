"""
CourseCart: course catalog browser and schedule calculator.
"""

__version__ = "0.1.0"
