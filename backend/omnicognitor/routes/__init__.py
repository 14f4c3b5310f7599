# Routes package init
"""
OmniCognitor Gateway: Routes Package
=====================================

Route Inventory:
    - system.py:     GET /api, /api/health, /api/info, /api/stats
    - resources.py:  GET|POST /api/{users,platforms,workspaces,conversations,messages}
    - gateway.py:    FastAPI catch-all that dispatches into the route table
"""

from omnicognitor.routes import resources, system
from omnicognitor.routing import RouteTable


def build_route_table() -> RouteTable:
    """Route table with every system and resource handler registered."""
    table = RouteTable()
    system.register(table)
    resources.register(table)
    return table
