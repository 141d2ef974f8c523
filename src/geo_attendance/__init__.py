"""Geotagged attendance package.

Organized by feature modules (geo, attendance, employees, stations, reports)
with a thin Flask controller layer over service/repository layers.
"""

__version__ = "0.3.0"
