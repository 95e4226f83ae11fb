"""
Infrastructure layer - external service integrations.

Each subdirectory wraps an external dependency:
- storage: Object storage (S3)

These wrappers translate external failures into our error taxonomy.
"""
