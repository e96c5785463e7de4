"""
Student Records API - Services Layer
======================================

Service Inventory:
    - StudentStore: equality-filtered select/insert/update/delete on the student table
    - StudentService: required fields, duplicate email and credential checks

Routes handle HTTP; services raise application exceptions that main.py maps
to status codes.
"""
