"""Local marketplace order and notification service.

The package exposes no public names; importing it only marks ``marketplace``
as a regular package.
"""
