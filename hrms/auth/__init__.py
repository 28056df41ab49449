"""
Bearer token authentication for the report builder API.
"""
