"""
Outreach Analytics Package.

Analytics engine and FastAPI service for weekly LinkedIn outreach metrics:
filtering, aggregation, trend fitting and forecasting, agent scoring,
benchmark comparison and insight generation.

Subpackages:
    - api: FastAPI route handlers
    - core: Configuration and dependencies
    - models: Pydantic schemas and enums
    - services: Analytics engine services
"""

__version__ = "1.0.0"
