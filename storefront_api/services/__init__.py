# Services package init
"""
Storefront API - Services Layer
=================================

What:  Business logic between routes (HTTP) and the database.

Service Inventory:
    - validation:       field checks and title-case normalization (pure)
    - UpdateBuilder:    SET list holding only the supplied columns
    - CustomerService:  create / partial_update / replace / delete
    - ListingService:   first-50-rows reads for customers, orders, products
    - EchoService:      calls the echo function for GET /say
"""
