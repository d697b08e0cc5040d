"""Application services: batch validation, sessions, submission, templates, dashboard."""
