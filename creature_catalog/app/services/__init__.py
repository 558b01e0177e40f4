"""
Service layer.

``creature_repository`` is the only module that touches the store;
``term_resolver`` and ``pagination`` hold the lookup and paging rules;
``creature_service`` ties them together for the API.  ``seed_service``
is the bulk importer.
"""
