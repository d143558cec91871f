"""Farm and parcel boundary capture.

Headless polygon-drawing component: collects clicked vertices from a
pluggable map surface, keeps a live preview, estimates the enclosed
area in square metres, and hands the closed ring to the caller once
the user finishes drawing.
"""

__version__ = "0.1.0"
