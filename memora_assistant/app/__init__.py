"""
API Layer - FastAPI Surface for the Chat Service
"""
