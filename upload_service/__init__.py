"""
S3 Upload Service - accept file uploads and store them in an S3 bucket.

This package contains the complete application:
- infrastructure: Object storage integration
- api: FastAPI routes and dependencies
- config: Application configuration
"""

__version__ = "0.1.0"
