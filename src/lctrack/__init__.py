"""Personal LeetCode progress tracker."""

__version__ = "0.1.0"
