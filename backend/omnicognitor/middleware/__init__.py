# Middleware package init
"""
OmniCognitor Gateway: Middleware Package
=========================================

Middleware Chain:
    Request → [CORS] → [Request ID] → [Logging] → Gateway route

    1. CORS first: OPTIONS is answered before anything else runs, and every
       other response leaves with the static CORS headers attached.
    2. Request ID: correlation id stored in a ContextVar.
    3. Logging: method, path, status and duration, tagged with the id.
"""
