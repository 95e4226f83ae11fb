"""
GPS Data Gateway - serves stored GPS data documents from S3 over HTTP.

This package contains the complete application:
- core: Framework-agnostic key construction and error taxonomy
- infrastructure: Object storage integration
- api: FastAPI routes and dependencies
- config: Application configuration
"""

__version__ = "0.1.0"
