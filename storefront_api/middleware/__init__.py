# Middleware package init
"""
Storefront API - Middleware Package
=====================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters):
    Request → [Request ID] → [Logging] → Route Handler

    1. Request ID: accept a well-formed client ID or generate one
    2. Access log: method, path, status, duration and cust_code with that ID

    The response travels back through the same chain, so the request ID is
    added to response headers and the logger sees the final status code.
"""
