"""
Pydantic schema definitions for API payloads.

Request models accept skill sets as JSON lists; the record store does
the validation and de-duplication, so these models only describe the
shape of the data.
"""
