# Routes package init
"""
CustomerBook Backend — Routes Package
=======================================

Route Inventory:
    - customers.py: JSON API   GET/POST /customers, GET/PUT/DELETE /customers/{id}
    - pages.py:     HTML UI    /customer, /customer/{id}, /customer/edit/{id}
    - health.py:    GET /health

Routes stay thin: parse the request, call a service or view model, pick the
status code. Business rules live in services/.
"""
