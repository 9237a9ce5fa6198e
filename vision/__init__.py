"""
vision - Classification collaborator boundary
=============================================

The image classifier itself runs elsewhere; this package only talks to
it and turns its answers into :class:`~control.density.DensitySnapshot`
values the controller can trust.

Modules
-------
schemas
    Pydantic models of the classifier's JSON contract.
classifier
    :class:`HttpClassifier` client and :func:`to_snapshot` conversion.
"""
