"""
API Server
"""
