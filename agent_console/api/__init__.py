"""Agent Console API - FastAPI app and routes"""
