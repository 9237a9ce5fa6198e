"""
web - HTTP surface
==================

Modules
-------
api
    :func:`create_app` FastAPI factory for the operator command surface
    and the observability feed.
"""
