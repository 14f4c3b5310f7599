# Services package init
"""
OmniCognitor Gateway: Services Layer
=====================================

Service Inventory:
    - DataAPIClient:   async httpx client for the upstream PostgREST API
    - registry:        resource → upstream table definitions
    - ResourceService: list / create / stats logic on top of the client
"""
