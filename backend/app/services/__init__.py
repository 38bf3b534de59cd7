# Services package init
"""
CustomerBook Backend — Services Layer
=======================================

Service Inventory:
    - CustomerStore:   persistence + field validation (returns None when absent)
    - CustomerService: one store call per API operation, absence → NotFoundError,
                       unexpected failures → DatabaseError with the operation's message
"""
