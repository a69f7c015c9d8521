# Services package init
"""
Hotel Listings Backend — Services Layer
========================================

What:  Business logic layer sitting between routes (HTTP) and the record store.
How:   Services accept plain documents, apply business rules, and return results.
       Routes obtain them through FastAPI dependencies.

Service Inventory:
    - RecordStore (abstract) / JsonFileRecordStore: one JSON file per hotel
    - validate_hotel: declarative field rules for hotel documents
    - HotelService: create / update / get / list orchestration
    - FileService: image upload filters, storage, and cleanup
    - ImageService: attach uploaded images to a hotel record
"""
