"""
Hotel Listings Backend — Application Package Initializer
=========================================================

What: Marks the `listings` directory as a Python package.
Who:  Imported by uvicorn (`listings.main:app`), pytest, and every module
      that needs configuration or services.

Architecture Note:
    The backend is layered the same way top to bottom:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation, orchestration
    ├─────────────────────────────────────┤
    │             Schemas (Data)          │  ← Pydantic API contracts
    ├─────────────────────────────────────┤
    │   Record Store (Persistence)        │  ← One JSON file per hotel
    └─────────────────────────────────────┘

    Routes translate HTTP into service calls; services never import FastAPI.
"""

__version__ = "1.0.0"
