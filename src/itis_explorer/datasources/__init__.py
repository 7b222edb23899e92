"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, field names, defaults
    ├── models.py         # Response and result models
    └── {feature}.py      # One module per concept (query, gateway, ...)

Currently only ``itis/`` lives here.  Fetch code goes through a
``requests.Session`` built by ``services.http.create_session`` and raises the
typed errors from ``itis_explorer.errors``.
"""
