# Routes package init
"""
Hotel Listings Backend — API Routes Package
============================================

Route Inventory:
    - hotels.py:  POST /hotels                 (create)
                  GET  /hotels                 (list)
                  GET  /hotels/{identifier}    (get by ID or slug)
                  PUT  /hotels/{hotel_id}      (update)
    - images.py:  POST /images                 (attach uploads to a hotel)
                  GET  /images/{filename}      (serve an uploaded image)
    - health.py:  GET  /health                 (service health check)

Routes stay thin: extract request data, call a service, shape the response.
"""
