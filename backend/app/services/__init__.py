# Services package init
"""
Elite Logistic Backend — Services Layer
=========================================

Service Inventory:
    - ShipmentStore: validation and persistence of shipment records

The store knows nothing about HTTP; it raises ValidationError, NotFoundError
and DatabaseError and leaves the status codes to the API layer.
"""
