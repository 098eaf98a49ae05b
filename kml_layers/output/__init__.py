"""Output packaging.

- naming: archive entry names (sanitised, de-duplicated)
- packaging: GeoJSON serialisation and zip bundling
"""
