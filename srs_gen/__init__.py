"""SRS generator.

Expands a project name, description and up to three member names into a
complete Software Requirements Specification and exports it as a PDF,
either by rasterizing the rendered preview locally or through a remote
rendering service.
"""

__version__ = "0.1.0"
