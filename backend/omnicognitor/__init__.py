"""
OmniCognitor Gateway: Application Package
==========================================

What: JSON gateway in front of a hosted PostgREST/Supabase data API.
How:  Every request is normalized, looked up in a route table, and handed to a
      handler that makes one upstream REST call and wraps the result in a
      `{success, data | error | stats}` envelope.

Layout:

    ┌─────────────────────────────────────┐
    │   Middleware (CORS, ID, logging)    │
    ├─────────────────────────────────────┤
    │   Routing (route table, dispatch)   │
    ├─────────────────────────────────────┤
    │   Routes (system, resources)        │
    ├─────────────────────────────────────┤
    │   Services (resource logic)         │
    ├─────────────────────────────────────┤
    │   Data API client (httpx)           │
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
