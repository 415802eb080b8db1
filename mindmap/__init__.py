"""
Mind map editor core.

In-memory concept-graph model (GraphStore), pointer drag and inline text
editing sessions, snapshot export/import and edge geometry. The NiceGUI page
in app.py is a thin consumer of these modules.
"""

__version__ = "0.3.0"
