"""
Trackboard - Derived Metrics Engine for the Project-Tracking Dashboard

This package contains the pure computations behind the dashboard charts:
- models: Project record schemas (sprints, tasks, members, risks)
- metrics: Burndown, velocity, daily progress, contribution,
  backlog prioritization, risk scoring and sprint statistics
- platform: Cross-cutting concerns (configuration, logging)
"""

__version__ = "0.1.0"
