# Routes package init
"""
Student Records API - API Routes Package
==========================================

Route Inventory:
    - auth.py:      POST /login, POST /register
    - students.py:  GET /students/search/{id}
                    PUT /students/update/{id}
                    DELETE /students/delete/{id}
    - pages.py:     GET /                       (landing page)
    - health.py:    GET /health

Routes stay thin: read the request, call StudentService, shape the response.
"""
