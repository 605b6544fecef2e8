"""Pipeline subpackages: ``markup`` helpers and the ``site_builder``."""
