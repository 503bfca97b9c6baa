"""
Interview Coach root package.

This package contains all application source code organized by responsibility:
- api/       : FastAPI routes and HTTP handling
- core/      : Configuration, logging, security and cross-cutting utilities
- services/  : Business logic and orchestration
- llm/       : Generative-AI integration and prompt management
- database/  : Document store access
- models/    : Pydantic models for request/response schemas
- scripts/   : Admin command line
"""

__version__ = "1.0.0"
