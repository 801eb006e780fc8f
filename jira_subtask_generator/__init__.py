"""Jira Subtask Generator - create Jira subtasks from a plain-text batch file

Parses a small text format (a ``@PROJECT:PARENT-1`` header followed by
``## Title || Hours`` sections) and creates one Jira subtask per section
under the given parent issue.
"""

__version__ = "0.1.0"
__author__ = "Jira Subtask Generator Team"
