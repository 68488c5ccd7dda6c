"""
PR Review Queue

A small backend that aggregates pull-request review assignments for a
GitHub organization, exposing teams, per-team reviewer queues and
pending-PR counts over HTTP.
"""

__version__ = "1.0.0"
__author__ = "PR Review Queue Team"
