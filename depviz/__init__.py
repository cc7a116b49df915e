"""depviz: dependency graphs of class, interface and trait declarations."""

__version__ = "0.1.0"
