"""
Pydantic schemas for API request and response validation.

Wire format is camelCase (Storefront API convention); models accept
snake_case field names as well.
"""
