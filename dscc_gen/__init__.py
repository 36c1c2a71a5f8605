"""dscc-gen -- generates Community Visualization and Community Connector projects."""

__version__ = "0.1.0"
