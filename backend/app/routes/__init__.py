# Routes package init
"""
Elite Logistic Backend — API Routes Package
=============================================

Route Inventory:
    - shipments.py:  /api/shipments[/{trackingNumber}]  (CRUD)
    - health.py:     GET /api/health, GET /api/test     (liveness, diagnostics)

Routes stay THIN: extract the request data, call the ShipmentStore, return
the result. Status codes for failures come from the global exception
handlers in main.py.
"""
