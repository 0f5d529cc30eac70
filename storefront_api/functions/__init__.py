# Functions package init
"""
Storefront API - Serverless Functions
=======================================

Handlers deployable on their own behind an API gateway. GET /say calls
them either over HTTP (ECHO_FUNCTION_URL) or in-process.
"""
