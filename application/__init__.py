"""
Application Layer for LiftLog.

This package contains:
- ports/: Abstract repository interfaces (what the domain needs)
- use_cases/: Workflows coordinating the core services and repositories
- exceptions: Errors shared by the application and infrastructure layers
"""
