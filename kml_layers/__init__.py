"""KML Layers — KML to GeoJSON conversion.

Converts a KML document into GeoJSON, either as a single merged
FeatureCollection or as one FeatureCollection per KML ``<Folder>``
bundled into a zip archive. The folder hierarchy is preserved as a
``folderPath`` property and in the archive entry names.
"""

__version__ = "0.1.0"
