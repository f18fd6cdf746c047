"""Service Layer — store operations for the API and the dashboard controller.

Invariants:
    - Services raise typed errors from core/errors.py; routes never build error bodies
"""
