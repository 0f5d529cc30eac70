# Routes package init
"""
Storefront API - API Routes Package
=====================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - health.py:     GET  /health
    - customers.py:  GET/POST /customers, PATCH/PUT/DELETE /customers/{cust_code}
    - listings.py:   GET  /orders, GET /products
    - echo.py:       GET  /say

Routes stay thin: validate, call a service, shape the response.
"""
