"""
API Schemas
Pydantic request and response models for the HTTP API
"""
