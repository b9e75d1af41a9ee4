"""Campus Coffee — points of sale on campus, with OpenStreetMap import."""

__version__ = "1.0.0"
