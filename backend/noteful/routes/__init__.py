# Routes package init
"""
Noteful Backend — API Routes Package
======================================

Route Inventory (entity routers are mounted under API_PREFIX, default /api):
    - folders.py: /folders, /folders/{id}
    - tags.py:    /tags, /tags/{id}
    - notes.py:   /notes, /notes/{id}   (list accepts searchTerm, folderId, tagId)
    - health.py:  GET /health

Design Principle:
    Routes are THIN. They extract data from the request, call a service
    obtained through Depends(), and set status codes and headers. Services
    return None for a missing entity and the route falls through to 404.
"""
