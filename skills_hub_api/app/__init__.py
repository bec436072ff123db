"""
Application package initializer.

This package contains the entrypoint for the API and its submodules.
The record store and its validation rules live in ``core``, the
matching and category lookup logic in ``services``, request and
response models in ``schemas`` and the HTTP routes under
``api/<version>/``.
"""
